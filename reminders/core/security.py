"""
Security utilities for Reminders

This module provides password hashing, secret key handling for signed
session cookies, CSRF tokens, log sanitization and the security headers
middleware.
"""

import hashlib
import hmac
import logging
import os
import re
import secrets
import string
import time
from typing import Optional

from fastapi import Request
from passlib.context import CryptContext
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

SECRET_FILE_PATH = "data/.secret_key"


class PasswordHasher:
    """
    bcrypt password hashing through passlib.

    Verification goes through passlib's constant-time digest comparison.
    `dummy_verify` spends the same work factor without a stored hash, so a
    login for an unknown username costs as much as a wrong password.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            # Hashes below the configured cost are flagged for upgrade
            bcrypt__min_rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: Optional[str], hashed_password: Optional[str]) -> bool:
        """Check a password against a stored hash.

        Every call costs one bcrypt verification, including empty passwords
        and missing or malformed hashes.
        """
        if not hashed_password:
            return self.dummy_verify()
        try:
            return self._context.verify(password or "", hashed_password)
        except (ValueError, TypeError):
            # Malformed stored hash
            logger.warning("Stored password hash could not be parsed")
            return self.dummy_verify()

    def dummy_verify(self) -> bool:
        """Burn one verification's worth of time. Always returns False."""
        self._context.dummy_verify()
        return False

    def needs_rehash(self, hashed_password: str) -> bool:
        return self._context.needs_update(hashed_password)


def generate_secure_secret_key(length: int = 64) -> str:
    """
    Generate a cryptographically secure secret key.

    Args:
        length: Length of the secret key (default: 64 characters)

    Returns:
        A secure random string suitable for use as a SECRET_KEY
    """
    alphabet = string.ascii_letters + string.digits + "-_"
    return ''.join(secrets.choice(alphabet) for _ in range(length))


def get_or_create_secret_key(
    configured: Optional[str] = None,
    secret_file_path: str = SECRET_FILE_PATH,
) -> str:
    """
    Resolve the key used to sign session cookies.

    1. An explicitly configured key (SECRET_KEY setting) wins.
    2. Otherwise a previously generated key is read from the secret file.
    3. Otherwise a new key is generated and written to the secret file so
       that existing sessions survive a restart.

    Raises:
        ValueError: If the resolved key doesn't meet security requirements
    """
    if configured:
        logger.info("Using SECRET_KEY from configuration")
        validate_secret_key(configured)
        return configured

    if os.path.exists(secret_file_path):
        try:
            with open(secret_file_path, 'r') as f:
                secret_key = f.read().strip()
        except OSError as e:
            logger.warning(f"Could not read secret key file: {e}")
        else:
            if secret_key:
                logger.info("Using SECRET_KEY from secret file")
                validate_secret_key(secret_key)
                return secret_key

    logger.warning("No SECRET_KEY configured, generating new one")
    secret_key = generate_secure_secret_key()

    try:
        os.makedirs(os.path.dirname(secret_file_path) or ".", exist_ok=True)
        with open(secret_file_path, 'w') as f:
            f.write(secret_key)
        _set_secure_file_permissions(secret_file_path)
        logger.info("Generated new SECRET_KEY and saved to secure file")
    except OSError as e:
        logger.error(f"Could not save secret key to file: {e}")
        logger.warning("Using generated key in memory only (sessions end on restart)")

    return secret_key


def validate_secret_key(secret_key: str) -> None:
    """
    Validate that a secret key meets security requirements.

    Raises:
        ValueError: If the secret key doesn't meet requirements
    """
    if not secret_key:
        raise ValueError("SECRET_KEY cannot be empty")

    if len(secret_key) < 32:
        raise ValueError("SECRET_KEY must be at least 32 characters long")

    insecure_defaults = [
        "your-secret-key-here-change-in-production",
        "change-me",
        "secret",
        "password",
    ]
    if secret_key.lower() in insecure_defaults:
        raise ValueError("SECRET_KEY appears to be an insecure default value")

    # At least 8 distinct characters
    if len(set(secret_key.lower())) < 8:
        raise ValueError("SECRET_KEY has insufficient entropy (too repetitive)")

    logger.debug("SECRET_KEY validation passed")


def _set_secure_file_permissions(file_path: str) -> None:
    """Restrict the file to owner read/write (0o600)."""
    try:
        os.chmod(file_path, 0o600)
    except OSError as e:
        logger.warning(f"Could not set secure file permissions on {file_path}: {e}")


def sanitize_log_data(data: Optional[str], max_length: int = 100) -> str:
    """
    Sanitize user-supplied data for safe logging.

    Truncates, strips control characters (log injection) and masks
    anything that looks like a secret assignment.
    """
    if not data:
        return ""

    if len(data) > max_length:
        data = data[:max_length] + "..."

    data = re.sub(r'[\r\n\t\x00-\x1f\x7f]', '?', data)
    data = re.sub(r'(?i)(password|secret|token)[\'"\s]*[:=][\'"\s]*[^\s\'"]+',
                  r'\1=****', data)
    return data


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers for XSS and clickjacking prevention.
    """

    security_headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Content-Security-Policy": (
            "default-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "form-action 'self'; "
            "frame-ancestors 'none'; "
            "base-uri 'self'"
        ),
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
    }

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for header_name, header_value in self.security_headers.items():
            response.headers.setdefault(header_name, header_value)
        return response


CSRF_TOKEN_MAX_AGE = 3600


def _csrf_signature(secret_key: str, message: str, binding: str) -> str:
    return hmac.new(
        secret_key.encode('utf-8'),
        f"{message}:{binding}".encode('utf-8'),
        hashlib.sha256,
    ).hexdigest()


def generate_csrf_token(secret_key: str, binding: str = "") -> str:
    """
    Generate a signed CSRF token of the form ``timestamp:random:signature``.

    `binding` ties the token to the caller's session token so that a token
    scraped from another session does not validate.
    """
    timestamp = str(int(time.time()))
    random_part = secrets.token_urlsafe(32)
    message = f"{timestamp}:{random_part}"
    return f"{message}:{_csrf_signature(secret_key, message, binding)}"


def validate_csrf_token(
    csrf_token: Optional[str],
    secret_key: str,
    binding: str = "",
    max_age: int = CSRF_TOKEN_MAX_AGE,
) -> bool:
    """Check signature, binding and age of a CSRF token."""
    if not csrf_token:
        return False

    parts = csrf_token.split(':')
    if len(parts) != 3:
        return False

    timestamp, random_part, signature = parts
    expected = _csrf_signature(secret_key, f"{timestamp}:{random_part}", binding)
    if not hmac.compare_digest(signature, expected):
        return False

    try:
        token_time = int(timestamp)
    except ValueError:
        return False
    if int(time.time()) - token_time > max_age:
        logger.debug("CSRF token expired")
        return False
    return True
