"""Centralized configuration for notiontree using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the working directory: .env, .env.local

The decoder itself is pure; the only knobs are the log level and the base URL
used when rewriting image links through the service's image proxy.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_IMAGE_PROXY_BASE = "https://www.notion.so"


class Settings(BaseSettings):
    """Typed configuration loaded from env and `.env` files.

    Attributes
    ----------
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    image_proxy_base : str
        Origin that serves proxied images (no trailing slash); maps from
        `NOTIONTREE_IMAGE_PROXY_BASE`.
    """

    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    image_proxy_base: str = Field(
        default=DEFAULT_IMAGE_PROXY_BASE, alias="NOTIONTREE_IMAGE_PROXY_BASE"
    )

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("image_proxy_base")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests can force a rebuild via `load_settings.cache_clear()` after
    mutating `os.environ`.
    """
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "notiontree") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
