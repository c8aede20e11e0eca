"""Application settings for the PersonalOS data store.

This module centralises the environment-dependent configuration of the store:
which deployment environment is running, where the SQLite file and the
backups live, and how verbose logging should be. Environment variables are
loaded from a ``.env`` file using ``python-dotenv`` and exposed through a
Pydantic settings object.
"""

from __future__ import annotations

import logging
import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_DB_PATH = os.path.join("data", "personalos.sqlite3")
DEFAULT_BACKUP_DIR = os.path.join("data", "backups")
# An unconfigured install is treated as production so it never seeds mock data.
DEFAULT_ENVIRONMENT = "production"


class AppEnvironment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


_LOG_LEVELS = {
    AppEnvironment.DEVELOPMENT: logging.DEBUG,
    AppEnvironment.STAGING: logging.INFO,
    AppEnvironment.PRODUCTION: logging.WARNING,
}


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    environment: AppEnvironment
    db_path: str = DEFAULT_DB_PATH
    backup_dir: str = DEFAULT_BACKUP_DIR

    model_config = ConfigDict(frozen=True)

    def should_seed_mock_data(self) -> bool:
        """Return ``True`` when default rows may be seeded into empty stores."""
        return self.environment is not AppEnvironment.PRODUCTION

    def is_debug_mode(self) -> bool:
        return self.environment is AppEnvironment.DEVELOPMENT

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self.environment]


def build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    raw_env = os.getenv("PERSONALOS_ENV", DEFAULT_ENVIRONMENT).strip().lower()
    try:
        environment = AppEnvironment(raw_env)
    except ValueError:
        allowed = ", ".join(e.value for e in AppEnvironment)
        raise RuntimeError(
            f"PERSONALOS_ENV must be one of: {allowed} (got {raw_env!r})"
        ) from None

    db_path = os.getenv("PERSONALOS_DB") or DEFAULT_DB_PATH
    backup_dir = os.getenv("PERSONALOS_BACKUP_DIR") or DEFAULT_BACKUP_DIR

    return Settings(environment=environment, db_path=db_path, backup_dir=backup_dir)


# Public settings instance
settings = build_settings()
