"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for the Oyou server happen here. No module
should call os.getenv() or os.environ.get() directly -- import get_settings()
instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. access_token_secret -> ACCESS_TOKEN_SECRET).

  @model_validator(mode="after"): Cross-field validation after all fields are
      resolved. Dev mode (DEBUG=true) generates a signing secret with a
      warning; production mode refuses to start without one.

Security notes:
  ACCESS_TOKEN_SECRET shorter than 32 chars is rejected outright. HS256 token
  signing relies on key entropy -- a short key weakens every issued credential.

Layer rule: core/ is the kernel. This module may not import from api/, auth/,
or store/.
"""

import logging
import secrets
from functools import lru_cache
from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

logger = logging.getLogger("oyou.config")

_DEFAULT_SQLITE_URL = f"sqlite:///{Path(__file__).resolve().parent.parent / 'store' / 'oyou.db'}"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    host: str = "0.0.0.0"  # noqa: S104 -- container listener
    port: int = 5000

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    # Empty string is the sentinel for "not configured". The model_validator
    # below either generates a dev secret or raises, so callers never see "".
    access_token_secret: str = ""
    token_expire_seconds: int = 3600

    # ------------------------------------------------------------------
    # Document store
    # ------------------------------------------------------------------

    database_url: str = ""
    db_user: str = ""
    db_pass: str = ""
    db_host: str = ""
    db_name: str = "oyouworld"

    # ------------------------------------------------------------------
    # Search provider (Google Custom Search JSON API)
    # ------------------------------------------------------------------

    google_api_key: str = ""
    google_cse_id: str = ""
    search_timeout_seconds: float = 10.0

    # ------------------------------------------------------------------
    # HTTP surface
    # ------------------------------------------------------------------

    cors_origins: list[str] = ["https://oyou-client.vercel.app", "http://localhost:3000"]
    token_rate_limit: str = "20/minute"
    search_rate_limit: str = "30/minute"

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_secret(self) -> "Settings":
        """Enforce the signing secret policy.

        Dev mode (DEBUG=true): auto-generate a random secret with a warning.
            Issued tokens will not survive a restart.

        Production mode: refuse to start if ACCESS_TOKEN_SECRET is missing.

        Both modes: reject secrets shorter than 32 characters.
        """
        if not self.access_token_secret:
            if self.debug:
                self.access_token_secret = secrets.token_hex(32)
                logger.warning("Using auto-generated ACCESS_TOKEN_SECRET. Tokens will not persist across restarts.")
            else:
                raise ValueError(
                    "ACCESS_TOKEN_SECRET is required in production mode. "
                    "Set ACCESS_TOKEN_SECRET in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        if len(self.access_token_secret) < 32:
            raise ValueError("ACCESS_TOKEN_SECRET must be at least 32 characters.")
        return self

    @property
    def resolved_database_url(self) -> str:
        """Return the SQLAlchemy URL for the document store.

        DATABASE_URL wins when set. Otherwise DB_HOST switches to a PostgreSQL
        URL composed from the DB_* parts, and with neither the store falls back
        to a local SQLite file.
        """
        if self.database_url:
            return self.database_url
        if self.db_host:
            return URL.create(
                "postgresql",
                username=self.db_user or None,
                password=self.db_pass or None,
                host=self.db_host,
                database=self.db_name,
            ).render_as_string(hide_password=False)
        return _DEFAULT_SQLITE_URL


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
