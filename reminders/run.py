#!/usr/bin/env python3
"""Run the Reminders application"""
import uvicorn

from reminders.core.config import settings


def main() -> None:
    uvicorn.run(
        "reminders.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )


if __name__ == "__main__":
    main()
