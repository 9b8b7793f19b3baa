"""
Settings

Process configuration, read once from the environment (and a local .env).
"""
import logging
import os
import secrets
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

logger = logging.getLogger("taskboard.settings")

DEFAULT_DATABASE_URL = "postgresql://localhost:5432/taskboard"
DEFAULT_JWT_EXPIRES_MINUTES = 720
DEFAULT_PAGE_SIZE = 5


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name} value: {raw!r} (expected an integer)")


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration."""
    database_url: str = DEFAULT_DATABASE_URL
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = DEFAULT_JWT_EXPIRES_MINUTES
    default_page_size: int = DEFAULT_PAGE_SIZE
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    port: int = 5000

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        jwt_secret = os.getenv("TASKBOARD_JWT_SECRET")
        if not jwt_secret:
            # Tokens signed with a generated secret do not survive a restart.
            logger.warning("TASKBOARD_JWT_SECRET not set. Generating a temporary one.")
            jwt_secret = secrets.token_urlsafe(32)

        origins = os.getenv("TASKBOARD_CORS_ORIGINS", "*")

        return cls(
            database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
            jwt_secret=jwt_secret,
            jwt_algorithm=os.getenv("TASKBOARD_JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=_int_env("TASKBOARD_JWT_EXPIRES_MINUTES", DEFAULT_JWT_EXPIRES_MINUTES),
            default_page_size=_int_env("TASKBOARD_PAGE_SIZE", DEFAULT_PAGE_SIZE),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("TASKBOARD_LOG_LEVEL", "INFO").upper(),
            port=_int_env("TASKBOARD_PORT", 5000),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings.from_env()
