import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

test_db_path = PROJECT_ROOT / "test.db"
if test_db_path.exists():
    test_db_path.unlink()

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ["AI_API_KEY"] = ""

from review_analytics.main import app  # noqa: E402
from review_analytics.db.base import Base  # noqa: E402
from review_analytics.api.dependencies import get_db, get_review_generator  # noqa: E402
from review_analytics.core.exceptions import GenerationError  # noqa: E402
from review_analytics.core.security import get_password_hash  # noqa: E402
from review_analytics.models.user import User  # noqa: E402
from review_analytics.services.store import ReviewStore  # noqa: E402

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class FakeGenerator:
    """Stands in for the AI model; records every call it receives."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.reply = "Looks fine overall."
        self.fail = False
        self.calls = []

    async def __call__(self, code: str, language: str) -> str:
        self.calls.append((code, language))
        if self.fail:
            raise GenerationError("AI review failed: upstream unavailable")
        return self.reply


_generator = FakeGenerator()

app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_review_generator] = lambda: _generator


@pytest.fixture
def fake_generator():
    _generator.reset()
    yield _generator
    _generator.reset()


@pytest.fixture(scope="module")
def client():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    user = User(email="test@example.com", name="Test", hashed_password=get_password_hash("test"))
    db.add(user)
    db.commit()
    db.close()
    with TestClient(app) as c:
        yield c
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    memory_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=memory_engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=memory_engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=memory_engine)
        memory_engine.dispose()


@pytest.fixture
def store(db_session):
    db_session.add(User(id=1, email="owner@example.com", hashed_password="x"))
    db_session.add(User(id=2, email="other@example.com", hashed_password="x"))
    db_session.commit()
    return ReviewStore(db_session)
