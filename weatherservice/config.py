from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings:
    # --- Auth / Server ---
    API_KEY: str = os.getenv("WEATHER_API_KEY", "")
    HOST: str = os.getenv("WEATHER_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("WEATHER_PORT", os.getenv("PORT", "8080")))

    # --- Store ---
    SEED_PATH: str = os.getenv("WEATHER_SEED_PATH", "")

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def validate(cls) -> None:
        """Log warnings for suspicious configuration."""
        if cls.SEED_PATH and not os.path.exists(cls.SEED_PATH):
            log.warning(
                "WEATHER_SEED_PATH %s does not exist; starting empty",
                cls.SEED_PATH,
            )
        if cls.LOG_LEVEL not in _LOG_LEVELS:
            log.warning("LOG_LEVEL %s is not recognised; using INFO", cls.LOG_LEVEL)

    @classmethod
    def log_level(cls) -> int:
        if cls.LOG_LEVEL in _LOG_LEVELS:
            return getattr(logging, cls.LOG_LEVEL)
        return logging.INFO


settings = Settings()
