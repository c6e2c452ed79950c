"""Shared template configuration for web routes"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from reminders.core.config import settings

PACKAGE_DIR = Path(__file__).parent.parent

templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))

templates.env.globals["app_name"] = settings.APP_NAME

__all__ = ["templates"]
