"""Database connection and session management.

This module handles the database connection using SQLAlchemy. Each request
gets its own session through the ``get_db`` dependency.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from roomshare.config import DATA_DIR, DATABASE_URL
from roomshare.models.base import Base
# Import models to ensure they are registered with Base.metadata
import roomshare.models  # noqa: F401

# Ensure data directory exists
DATA_DIR.mkdir(parents=True, exist_ok=True)

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=engine) -> None:
    Base.metadata.create_all(bind=bind)


# Initialize DB (create tables if not exist)
init_db()


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
