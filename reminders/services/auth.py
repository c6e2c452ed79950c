"""Login, logout and session resolution.

State machine per client:

    Anonymous --login(ok)--> Authenticated --logout--> Anonymous
    Anonymous --login(bad)--> Anonymous

A failed login never says whether the username or the password was wrong.
"""

import logging
from typing import Optional, Tuple

from reminders.core.schemas.auth import CurrentUser
from reminders.core.security import PasswordHasher
from reminders.core.utils.session_store import SessionStore
from reminders.repositories.users import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        sessions: SessionStore,
        hasher: PasswordHasher,
    ):
        self.users = users
        self.sessions = sessions
        self.hasher = hasher

    def authenticate(self, username: Optional[str], password: Optional[str]) -> Optional[CurrentUser]:
        """Check credentials. Returns the user on success, None otherwise.

        Unknown usernames still pay for one bcrypt verification.
        """
        user = self.users.find_by_username(username or "")
        if user is None:
            self.hasher.dummy_verify()
            return None
        if not self.hasher.verify(password or "", user.password):
            return None

        if self.hasher.needs_rehash(user.password):
            self.users.update_password(user.id, self.hasher.hash(password or ""))
            logger.info("Upgraded password hash", extra={"user_id": user.id})

        return CurrentUser(id=user.id, username=user.username)

    def login(
        self,
        username: Optional[str],
        password: Optional[str],
        previous_token: Optional[str] = None,
    ) -> Optional[Tuple[CurrentUser, str]]:
        """Authenticate and open a new session.

        Any session the client already held is dropped first so a token
        issued before login is never promoted.
        """
        user = self.authenticate(username, password)
        if user is None:
            return None

        if previous_token:
            self.sessions.delete(previous_token)
        self.sessions.purge_expired()
        token = self.sessions.create(user.id)
        return user, token

    def logout(self, token: Optional[str]) -> bool:
        return self.sessions.delete(token)

    def resolve(self, token: Optional[str]) -> Optional[CurrentUser]:
        """Map a session token to its user without modifying anything."""
        user_id = self.sessions.get_user_id(token)
        if user_id is None:
            return None
        user = self.users.get_by_id(user_id)
        if user is None:
            return None
        return CurrentUser(id=user.id, username=user.username)
