"""
Configuration for the Noteful API.

All settings come from environment variables, optionally loaded from a local
`.env` file. The database URL is owned by `noteful_database.db`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        secret_key: HMAC key used to sign access tokens
        algorithm: JWT signing algorithm
        access_token_expire_minutes: Lifetime of issued access tokens
        cors_origins: Origins allowed by the CORS middleware
        log_level: Root log level name
    """

    secret_key: str = "temporary_dev_secret"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30  # 30 days
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        """Load configuration from environment variables."""
        load_dotenv()
        settings = cls(
            secret_key=os.getenv("SECRET_KEY", "temporary_dev_secret"),
            algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(
                os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 30))
            ),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
        if "SECRET_KEY" not in os.environ:
            logger.warning("SECRET_KEY not set, using the development default")
        return settings


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


settings = Settings.from_env()
