import logging

from fastapi import FastAPI

from review_analytics.core.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)

from review_analytics.api.routes import ai, auth, dashboard, health
from review_analytics.db.base import Base
from review_analytics.db.session import engine, wait_for_db
import review_analytics.models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)

wait_for_db()
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.SERVICE_NAME, version=settings.SERVICE_VERSION)

app.include_router(auth.router)
app.include_router(ai.router)
app.include_router(dashboard.router)
app.include_router(health.router)
