"""
Process configuration, read once at startup.

Values come from the environment; a local .env file is loaded first.
"""

import os
import logging
from dataclasses import dataclass, fields

from dotenv import load_dotenv

from src.core.errors import MissingConfiguration


logger = logging.getLogger(__name__)

# Field name → environment variable
_REQUIRED = {
    "strapi_url": "STRAPI_URL",
    "strapi_token": "STRAPI_TOKEN",
    "provider_url": "PROVIDER_UBA_UI_URL",
    "bpp_id": "BPP_ID",
    "bpp_uri": "BPP_URI",
}


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for the benefits BPP.

    Usage:
        settings = Settings.from_env()
        settings.validate()
    """
    strapi_url: str = ""
    strapi_token: str = ""
    provider_url: str = ""
    bpp_id: str = ""
    bpp_uri: str = ""
    database_url: str = "applications.db"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            dotenv: Load a .env file before reading the environment

        Returns:
            Settings (not yet validated)
        """
        if dotenv:
            load_dotenv()

        return cls(
            **{name: os.getenv(env_key, "") for name, env_key in _REQUIRED.items()},
            database_url=os.getenv("DATABASE_URL", "applications.db"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def validate(self) -> "Settings":
        """
        Fail fast if any required value is missing or blank.

        Raises:
            MissingConfiguration: Naming every missing environment variable
        """
        missing = [
            env_key for name, env_key in _REQUIRED.items()
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            logger.error(f"Missing configuration: {', '.join(missing)}")
            raise MissingConfiguration(missing)
        return self

    def __repr__(self) -> str:
        # Keep the token out of logs
        shown = {
            f.name: ("***" if f.name == "strapi_token" and self.strapi_token else getattr(self, f.name))
            for f in fields(self)
        }
        return "Settings(" + ", ".join(f"{k}={v!r}" for k, v in shown.items()) + ")"
