"""
Back-office authentication.

Operators sign in with the credentials from the settings and receive a
short-lived signed token; ``core.security.require_admin`` verifies it
on every privileged route.
"""

import hmac
import logging

from storefront_api.app.core.config import settings
from storefront_api.app.core.exceptions import AuthError, ValidationError
from storefront_api.app.core.security import ADMIN_ROLE, create_access_token, verify_password

from ..schemas.admin import AdminLogin, AdminToken

logger = logging.getLogger(__name__)


class AdminService:

    @staticmethod
    def _password_matches(password: str) -> bool:
        if settings.admin_password_hash:
            return verify_password(password, settings.admin_password_hash)
        if settings.admin_password:
            return hmac.compare_digest(password.encode("utf-8"), settings.admin_password.encode("utf-8"))
        # No operator password configured: back office is closed.
        return False

    @classmethod
    async def login(cls, data: AdminLogin) -> AdminToken:
        """Check operator credentials and issue a session token.

        Both the id and the password are compared in constant time.
        Raises ``AuthError`` on any mismatch.
        """
        if not data.admin_id or not data.password:
            raise ValidationError("Admin ID and password are required")
        id_matches = hmac.compare_digest(data.admin_id.encode("utf-8"), settings.admin_id.encode("utf-8"))
        password_matches = cls._password_matches(data.password)
        if not (id_matches and password_matches):
            logger.warning("Rejected admin login for '%s'", data.admin_id)
            raise AuthError("Invalid credentials")
        expires_in = settings.access_token_expire_minutes * 60
        token = create_access_token({"sub": settings.admin_id, "role": ADMIN_ROLE}, expires_delta=expires_in)
        logger.info("Admin '%s' signed in", settings.admin_id)
        return AdminToken(token=token, expires_in=expires_in)
