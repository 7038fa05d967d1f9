from __future__ import annotations

import logging

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    shanten_cache_size: int = 65536
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="RIICHI_", env_file=".env", env_file_encoding="utf-8")


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Route structlog output through a level filter (default: ``settings.log_level``)."""
    numeric = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(numeric))
