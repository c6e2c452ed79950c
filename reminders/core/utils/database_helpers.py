"""
Database helper utilities for the health endpoint and setup script.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from reminders.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def get_database_type(bind: Optional[Engine] = None) -> str:
    """Database backend name ('sqlite', 'postgresql', ...)"""
    return (bind or default_engine).dialect.name


def get_database_info(bind: Optional[Engine] = None) -> Dict[str, Any]:
    """
    Get database connection information and metadata.

    Returns:
        Dict containing database type, connection status, and metadata
    """
    bind = bind or default_engine
    db_type = get_database_type(bind)
    info: Dict[str, Any] = {
        "type": db_type,
        "connected": False,
        "tables": [],
        "version": None,
        "error": None
    }

    try:
        with bind.connect() as conn:
            info["connected"] = True

            if db_type == "sqlite":
                info["version"] = conn.execute(text("SELECT sqlite_version()")).scalar()
            elif db_type == "postgresql":
                version_str = conn.execute(text("SELECT version()")).scalar()
                info["version"] = version_str.split()[1] if version_str else "unknown"

            info["tables"] = inspect(bind).get_table_names()

    except Exception as e:
        logger.error(f"Database connection error: {e}")
        info["error"] = str(e)

    return info


def check_database_health(bind: Optional[Engine] = None) -> Dict[str, Any]:
    """
    Perform database health check.

    Returns:
        Dict containing health status and metrics
    """
    bind = bind or default_engine
    health: Dict[str, Any] = {
        "status": "healthy",
        "database_type": get_database_type(bind),
        "connected": False,
        "table_count": 0,
        "last_error": None
    }

    db_info = get_database_info(bind)
    health["connected"] = db_info["connected"]
    health["table_count"] = len(db_info["tables"])

    if db_info["error"]:
        health["status"] = "unhealthy"
        health["last_error"] = db_info["error"]
    elif health["table_count"] == 0:
        health["status"] = "warning"
        health["last_error"] = "No tables found - database may need initialization"

    return health
