import logging
import time
from urllib.parse import urlparse

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from review_analytics.core.config import settings

logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def database_reachable() -> bool:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except OperationalError as exc:
        logger.warning("Database health check failed: %s", exc)
        return False
    return True


def wait_for_db(max_attempts: int = 10, delay_seconds: float = 2.0) -> None:
    """Block until the database is reachable or raise after exhausting retries."""

    url = urlparse(settings.DATABASE_URL)
    if url.scheme.startswith("sqlite"):
        return

    for attempt in range(1, max_attempts + 1):
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            if attempt > 1:
                logger.info("Database became reachable on attempt %s", attempt)
            return
        except OperationalError as exc:  # pragma: no cover - best effort guard
            logger.warning(
                "Database not ready (attempt %s/%s): %s", attempt, max_attempts, exc
            )
            if attempt == max_attempts:
                raise
            time.sleep(delay_seconds)
