from contextlib import contextmanager
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from reminders.core.config import settings


def get_connect_args(database_url: str) -> Dict[str, Any]:
    """Get database-specific connection arguments"""
    if database_url.startswith("sqlite"):
        # Requests are served from a thread pool
        return {"check_same_thread": False}
    return {}


def create_db_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite:///"):
        from pathlib import Path

        db_path = database_url[len("sqlite:///"):]
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, connect_args=get_connect_args(database_url))


engine = create_db_engine(settings.DATABASE_URL)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency for getting DB session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_sync() -> Generator[Session, None, None]:
    """Get a DB session outside of a request (startup, seeding scripts)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
