"""
Security helpers for password hashing and admin session tokens.

Tokens are compact JWTs signed with HMAC-SHA256 over base64url
encoded header and payload.  Each token carries an ``exp`` claim and
is verified (signature and expiry) on every privileged request, not
just at login.  Passwords are hashed with PBKDF2-HMAC-SHA256 using a
random per-password salt and compared in constant time.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .exceptions import AuthError

PBKDF2_ITERATIONS = 100_000
ADMIN_ROLE = "admin"


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], expires_delta: Optional[int] = None) -> str:
    """Create a signed token with the given claims.

    The payload is extended with ``iat`` and ``exp`` (UNIX timestamps).
    Clients send the token back as ``Authorization: Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "admin", "role": "admin"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = dict(data)
    now = int(time.time())
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["iat"] = now
    to_encode["exp"] = now + exp_seconds
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, str]]:
    """Verify and decode a token.

    Returns the payload if the signature matches and the token has not
    expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    try:
        signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
        expected_sig = _sign(signing_input, settings.secret_key)
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if not isinstance(data, dict):
            return None
        if data.get("exp") is None or int(data["exp"]) < int(time.time()):
            return None
    except (ValueError, TypeError):
        # Malformed base64, JSON or ``exp`` value.
        return None
    return data


security = HTTPBearer(auto_error=False)


def require_admin(credentials: HTTPAuthorizationCredentials = Depends(security)) -> Dict[str, str]:
    """Dependency guarding back-office routes.

    Raises ``AuthError`` (401) when the bearer token is missing, has a
    bad signature, has expired or was not issued to an operator.
    Returns the decoded claims on success.
    """
    if credentials is None:
        raise AuthError("Not authenticated")
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise AuthError("Invalid or expired token")
    if payload.get("role") != ADMIN_ROLE:
        raise AuthError("Insufficient permissions")
    return payload


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    Returns ``salthex$hashhex`` with a fresh 16-byte salt.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored ``salthex$hashhex`` string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)
