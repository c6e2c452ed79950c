"""FastAPI dependency providers.

Handlers receive the stores and services they need through `Depends`
instead of reaching for module-level singletons. Settings come from the
application that serves the request, so an app built with
`create_app(custom_settings)` uses those settings throughout.
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from reminders.core.config import Settings, settings
from reminders.core.security import PasswordHasher
from reminders.core.utils.session_store import SessionStore
from reminders.db.session import get_db
from reminders.repositories.reminders import ReminderRepository
from reminders.repositories.users import UserRepository
from reminders.services.auth import AuthService


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", settings)


@lru_cache()
def _hasher_for(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


def get_password_hasher(app_settings: Settings = Depends(get_app_settings)) -> PasswordHasher:
    return _hasher_for(app_settings.BCRYPT_ROUNDS)


def get_reminder_repository(db: Session = Depends(get_db)) -> ReminderRepository:
    return ReminderRepository(db)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_session_store(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_app_settings),
) -> SessionStore:
    return SessionStore(db, lifetime=timedelta(minutes=app_settings.SESSION_LIFETIME_MINUTES))


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionStore = Depends(get_session_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    return AuthService(users=users, sessions=sessions, hasher=hasher)
