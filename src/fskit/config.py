"""Runtime settings read from the environment.

Values come from ``FSKIT_*`` environment variables, then from a ``.env``
file in the current working directory.  Only two knobs exist; both have
safe defaults so that fskit runs with no configuration at all.
"""

from __future__ import annotations

import codecs
import logging
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX: str = "FSKIT_"
ENV_LOG_LEVEL: str = f"{ENV_PREFIX}LOG_LEVEL"
ENV_ENCODING: str = f"{ENV_PREFIX}ENCODING"

DEFAULT_LOG_LEVEL: int = logging.WARNING
DEFAULT_ENCODING: str = "utf-8"

LEVEL_NAMES: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Process-wide configuration."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    log_level: int = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Base level for the ``fskit`` logger before ``-v`` flags apply.",
    )
    encoding: str = Field(
        default=DEFAULT_ENCODING,
        description="Text encoding used when reading and appending file contents.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> int:
        if isinstance(value, int):
            return value
        name = str(value).strip().upper()
        if not name:
            return DEFAULT_LOG_LEVEL
        if name not in LEVEL_NAMES:
            raise ValueError(f"{name!r} is not a log level")
        return logging.getLevelName(name)

    @field_validator("encoding", mode="before")
    @classmethod
    def _check_codec(cls, value: Any) -> str:
        encoding = str(value).strip() or DEFAULT_ENCODING
        try:
            codecs.lookup(encoding)
        except LookupError as exc:
            raise ValueError(f"{encoding!r} is not a known codec") from exc
        return encoding
