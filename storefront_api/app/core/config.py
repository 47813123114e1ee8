"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so that
the storefront starts with no configuration at all; in production you
should at least override ``SECRET_KEY`` and the operator credentials.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Storefront API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Prefix under which all routes are mounted.  The storefront pages
    # call ``/api/...`` so this is the default.
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    # Lifetime of admin session tokens.  Defaults to twelve hours.
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 12)))
    algorithm: str = os.getenv("ALGORITHM", "HS256")

    # Operator credentials for the back office.  If ``ADMIN_PASSWORD_HASH``
    # is set (``salthex$hashhex``, see ``security.hash_password``) it takes
    # precedence over the plain ``ADMIN_PASSWORD``.  An empty password
    # disables admin login entirely.
    admin_id: str = os.getenv("ADMIN_ID", "admin")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")
    admin_password_hash: str = os.getenv("ADMIN_PASSWORD_HASH", "")

    # Path or connection string for the SQLite database.  Relative paths
    # are resolved against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "storefront.db")

    # Prefix of generated order tokens, e.g. ``MARS-7KQ2M1XZP``.
    order_id_prefix: str = os.getenv("ORDER_ID_PREFIX", "MARS")
    # Insert the default subscription packs when the catalog is empty.
    seed_catalog: bool = os.getenv("SEED_CATALOG", "true").lower() in {"1", "true", "yes"}

    # Hosted chat model used by the support widget.
    gemini_api_key: str = os.getenv("GEMINI_API_KEY", "")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    gemini_api_url: str = os.getenv(
        "GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    chat_system_instruction: str = os.getenv(
        "CHAT_SYSTEM_INSTRUCTION",
        "You are the storefront assistant. Answer questions about packs, "
        "pricing and the payment process briefly and politely.",
    )
    chat_timeout: float = float(os.getenv("CHAT_TIMEOUT", "30"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
