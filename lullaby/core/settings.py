"""App settings: loaded from environment variables with defaults."""

import os
from typing import List
from dotenv import load_dotenv
from .constants import (
    UPCOMING_SLEEP_LOOKBACK_HOURS as _DEFAULT_UPCOMING_LOOKBACK_HOURS,
    PATTERN_LOOKBACK_DAYS as _DEFAULT_PATTERN_LOOKBACK_DAYS,
    WAKE_WINDOW_LOOKBACK_DAYS as _DEFAULT_WAKE_WINDOW_LOOKBACK_DAYS,
)

load_dotenv()


class Settings:
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]
    CORS_EXTRA_ORIGINS: str = os.getenv("CORS_EXTRA_ORIGINS", "")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Clock used for hour-of-day maths when a request names no timezone
    DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "UTC")

    # Defaults from constants.py; overridable via env
    UPCOMING_SLEEP_LOOKBACK_HOURS: int = int(
        os.getenv("UPCOMING_SLEEP_LOOKBACK_HOURS", str(_DEFAULT_UPCOMING_LOOKBACK_HOURS))
    )
    PATTERN_LOOKBACK_DAYS: int = int(
        os.getenv("PATTERN_LOOKBACK_DAYS", str(_DEFAULT_PATTERN_LOOKBACK_DAYS))
    )
    WAKE_WINDOW_LOOKBACK_DAYS: int = int(
        os.getenv("WAKE_WINDOW_LOOKBACK_DAYS", str(_DEFAULT_WAKE_WINDOW_LOOKBACK_DAYS))
    )


settings = Settings()
