"""Initialize the database with proper schema"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine

from reminders.db.base import Base
from reminders.db.session import engine as default_engine

# Import all models explicitly to register them with SQLAlchemy
from reminders.db.models import reminder as _model_reminder  # noqa: F401
from reminders.db.models import session_store as _model_session_store  # noqa: F401
from reminders.db.models import user as _model_user  # noqa: F401

logger = logging.getLogger("reminders.database")


def init_database(engine: Optional[Engine] = None) -> None:
    """Create all tables with proper schema"""
    bind = engine or default_engine
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=bind)

        table_names = [table.name for table in Base.metadata.sorted_tables]
        logger.info("Database initialized", extra={
            "table_count": len(table_names),
            "tables": table_names
        })
    except Exception as e:
        logger.error(f"Error initializing database: {e}", extra={
            "error_type": type(e).__name__,
        })
        raise


if __name__ == "__main__":
    init_database()
