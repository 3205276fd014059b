"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can start without any configuration; in a production deployment
at least ``SECRET_KEY`` and ``DATABASE_URL`` should be overridden.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Nonprofit API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Signing key for bearer tokens.  Must be overridden outside of
    # local development.
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    # Tokens are valid for seven days by default.
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(7 * 24 * 60)))

    # PBKDF2 work factor.  Stored alongside every hash, so raising it
    # does not invalidate existing passwords.
    password_hash_iterations: int = int(os.getenv("PASSWORD_HASH_ITERATIONS", "100000"))

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "nonprofit.db")
    # Seconds a connection waits on a locked database before failing.
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "30"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
