"""
Structured logging configuration for Reminders.

Provides JSON-formatted logging with correlation IDs and security event helpers.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from reminders.core.config import settings

# Context variable for correlation ID (used across request lifecycle)
correlation_id_ctx: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

_RESERVED_RECORD_KEYS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName', 'taskName',
    'processName', 'process', 'exc_info', 'exc_text', 'stack_info',
    'message', 'asctime',
}

_SENSITIVE_KEYWORDS = {
    'password', 'secret', 'token', 'credential', 'cookie', 'sid', 'private',
}


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging with security context.
    """

    def __init__(self, include_sensitive: bool = False):
        super().__init__()
        self.include_sensitive = include_sensitive

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON"""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = correlation_id_ctx.get()
        if correlation_id:
            log_entry["correlation_id"] = correlation_id

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {}
        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_KEYS:
                continue
            if not self.include_sensitive and self._is_sensitive_field(key):
                extra_fields[key] = "[REDACTED]"
            else:
                extra_fields[key] = value

        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, default=self._json_default)

    def _is_sensitive_field(self, key: str) -> bool:
        key_lower = key.lower()
        return any(keyword in key_lower for keyword in _SENSITIVE_KEYWORDS)

    def _json_default(self, obj: Any) -> str:
        if isinstance(obj, datetime):
            return obj.isoformat()
        return str(obj)


def setup_logging(
    log_level: str = "INFO",
    enable_json: bool = True,
    log_file: Optional[str] = None,
    include_sensitive: bool = False
) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_json: Whether to use JSON formatting
        log_file: Optional file path for logging
        include_sensitive: Whether to include sensitive data in logs
    """
    if enable_json:
        formatter: logging.Formatter = StructuredFormatter(include_sensitive=include_sensitive)
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, "_reminders_handler", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler._reminders_handler = True  # type: ignore[attr-defined]

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler._reminders_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    # Reduce noise from external libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_correlation_id() -> str:
    """Get or create a correlation ID for the current context."""
    correlation_id = correlation_id_ctx.get()
    if not correlation_id:
        correlation_id = str(uuid.uuid4())
        correlation_id_ctx.set(correlation_id)
    return correlation_id


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_ctx.set(correlation_id)


def get_security_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"reminders.security.{name}")


def log_security_event(
    event_type: str,
    message: str,
    user_id: Optional[str] = None,
    ip_address: Optional[str] = None,
    extra_data: Optional[Dict[str, Any]] = None,
    level: int = logging.INFO,
) -> None:
    """
    Log a security event with structured data.

    Args:
        event_type: Type of security event (login_success, logout, ...)
        message: Human-readable message
        user_id: Optional user identifier
        ip_address: Optional IP address
        extra_data: Additional structured data
        level: Logging level for the event
    """
    logger = get_security_logger("events")

    security_data: Dict[str, Any] = {
        "event_type": event_type,
        "correlation_id": get_correlation_id(),
    }
    if user_id:
        security_data["user_id"] = user_id
    if ip_address:
        security_data["ip_address"] = ip_address
    if extra_data:
        security_data.update(extra_data)

    logger.log(level, message, extra=security_data)


def log_authentication_attempt(
    success: bool,
    username: Optional[str] = None,
    ip_address: Optional[str] = None,
) -> None:
    """Log a login attempt. The password never reaches this function."""
    from reminders.core.security import sanitize_log_data

    safe_username = sanitize_log_data(username, max_length=64) or "unknown"
    if success:
        log_security_event(
            "authentication_success",
            f"Successful login for user: {safe_username}",
            user_id=safe_username,
            ip_address=ip_address,
        )
    else:
        log_security_event(
            "authentication_failure",
            f"Failed login attempt for user: {safe_username}",
            user_id=safe_username,
            ip_address=ip_address,
            level=logging.WARNING,
        )


def log_csrf_validation_failure(ip_address: Optional[str] = None, endpoint: Optional[str] = None) -> None:
    """Log a CSRF validation failure"""
    log_security_event(
        "csrf_validation_failure",
        f"CSRF token validation failed for endpoint: {endpoint or 'unknown'}",
        ip_address=ip_address,
        level=logging.WARNING,
    )


def init_application_logging() -> None:
    """Initialize logging for the FastAPI application"""
    is_dev = settings.DEV_MODE

    log_level = "DEBUG" if is_dev else "INFO"
    # JSON logging in production, plain text in development
    enable_json = not is_dev

    setup_logging(
        log_level=log_level,
        enable_json=enable_json,
        include_sensitive=False,
    )

    logger = logging.getLogger("reminders.startup")
    logger.info(
        "Structured logging initialized",
        extra={
            "dev_mode": is_dev,
            "json_logging": enable_json,
            "log_level": log_level,
        }
    )
