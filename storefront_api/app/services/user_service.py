"""
Business logic for storefront accounts.

Passwords are stored as salted PBKDF2 hashes (``core.security``).
Emails are compared case-insensitively: they are trimmed and
lower-cased before being stored or looked up.
"""

import logging
import sqlite3

from storefront_api.app.core.db import get_connection, transaction
from storefront_api.app.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    PersistenceError,
    ValidationError,
)
from storefront_api.app.core.security import hash_password, verify_password

from ..schemas.user import UserCredentials, UserRead

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so that both failure paths
# cost one PBKDF2 computation.
_DUMMY_HASH = hash_password("not-a-real-password")


def _normalise_email(email: str | None) -> str:
    return (email or "").strip().lower()


class UserService:
    """Registration and login by email and password."""

    @classmethod
    async def register(cls, data: UserCredentials) -> UserRead:
        """Create a new user.

        Raises ``ValidationError`` if email or password is missing and
        ``DuplicateEmailError`` if the email is already registered.  The
        UNIQUE constraint on ``users.email`` decides duplicates, so two
        concurrent registrations cannot both succeed.
        """
        email = _normalise_email(data.email)
        if not email or not data.password:
            raise ValidationError("Email and password are required")
        hashed = hash_password(data.password)
        try:
            with transaction() as cursor:
                cursor.execute(
                    "INSERT INTO users (email, password) VALUES (?, ?)",
                    (email, hashed),
                )
                user_id = cursor.lastrowid
        except sqlite3.IntegrityError as exc:
            raise DuplicateEmailError() from exc
        except sqlite3.Error as exc:
            logger.exception("Registration of %s failed", email)
            raise PersistenceError("Registration failed") from exc
        logger.info("Registered user %s (id=%s)", email, user_id)
        return UserRead(id=user_id, email=email)

    @classmethod
    async def login(cls, data: UserCredentials) -> UserRead:
        """Return the identity matching email and password.

        Unknown email and wrong password both raise the same
        ``InvalidCredentialsError`` so the response does not reveal
        which accounts exist.
        """
        email = _normalise_email(data.email)
        if not email or not data.password:
            raise ValidationError("Email and password are required")
        try:
            conn = get_connection()
            try:
                row = conn.execute(
                    "SELECT id, email, password FROM users WHERE email = ?",
                    (email,),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.exception("Login lookup failed")
            raise PersistenceError("Internal server error during login") from exc

        stored_hash = row["password"] if row else _DUMMY_HASH
        if not verify_password(data.password, stored_hash) or row is None:
            logger.info("Failed login for %s", email)
            raise InvalidCredentialsError()
        return UserRead(id=row["id"], email=row["email"])

