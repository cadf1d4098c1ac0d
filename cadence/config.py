from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    default_timezone: str
    max_results: int
    app_mode: str
    log_level: str


def get_settings() -> Settings:
    return Settings(
        default_timezone=os.getenv("CADENCE_DEFAULT_TIMEZONE", "UTC"),
        max_results=int(os.getenv("CADENCE_MAX_RESULTS", "1000")),
        app_mode=os.getenv("APP_MODE", "all").strip().lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
