"""
Pytest configuration for backend tests.

Environment is pinned before any ``roomshare`` import so the app module picks
up a throwaway data directory, upload directory and signing key. Each test gets
its own in-memory SQLite database.
"""
import os
import tempfile

_TMP_ROOT = tempfile.mkdtemp(prefix="roomshare-tests-")
os.environ["DATA_DIR"] = os.path.join(_TMP_ROOT, "data")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_ROOT, "uploads")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["PRINCIPAL_CLAIM"] = "email"

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from roomshare.core.database import get_db  # noqa: E402
from roomshare.models import Base  # noqa: E402
from roomshare.utils.identity import create_access_token  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


def _memory_engine(create_schema: bool = True):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if create_schema:
        Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def engine():
    engine = _memory_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


def _override_db(app, engine) -> None:
    SessionTest = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_test_db():
        db = SessionTest()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db


@pytest.fixture
def app(engine):
    from roomshare.app import app as fastapi_app

    _override_db(fastapi_app, engine)
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def broken_app():
    """App wired to a database without tables, so every query fails."""
    from roomshare.app import app as fastapi_app

    engine = _memory_engine(create_schema=False)
    _override_db(fastapi_app, engine)
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def auth_header():
    def _make(principal: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(principal)}"}

    return _make


@pytest.fixture
def make_room(db_session):
    """Insert a room under a fixed code so tests can use readable codes."""
    from roomshare.models.room import RoomModel

    def _make(code: str, title: str = "Room") -> RoomModel:
        room = RoomModel(
            code=code,
            title=title,
            teacher="Ms. K",
            description="desc",
            created_at="2024-01-01T00:00:00+00:00",
        )
        db_session.add(room)
        db_session.commit()
        return room

    return _make
