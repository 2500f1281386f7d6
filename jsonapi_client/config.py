"""Client configuration and logging setup.

Settings can be given explicitly or read from the environment:

* ``JSONAPI_KEY_FORMAT`` - "as-is", "dasherized" or "underscored"
* ``JSONAPI_LOG_LEVEL`` - a logging level name or number
* ``JSONAPI_SERIALIZATION_OPTIONS`` - comma separated option names
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Literal

from pydantic import BaseModel, field_validator

PACKAGE_LOGGER = "jsonapi_client"

KeyFormat = Literal["as-is", "dasherized", "underscored"]


class ClientSettings(BaseModel):
    """Configuration shared by the serializer and router."""

    key_format: KeyFormat = "as-is"
    log_level: int = logging.WARNING
    serialization_options: list[str] = ["INCLUDE_ID"]

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: object) -> object:
        if isinstance(value, str) and not value.isdigit():
            level = logging.getLevelName(value.upper())
            if not isinstance(level, int):
                raise ValueError(f"Unknown log level {value!r}.")
            return level
        return value

    @classmethod
    def from_env(cls) -> ClientSettings:
        """Return settings read from JSONAPI_* environment variables."""
        values: dict[str, object] = {}
        key_format = os.environ.get("JSONAPI_KEY_FORMAT")
        if key_format:
            values["key_format"] = key_format
        log_level = os.environ.get("JSONAPI_LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level
        options = os.environ.get("JSONAPI_SERIALIZATION_OPTIONS")
        if options:
            values["serialization_options"] = [
                option.strip() for option in options.split(",") if option.strip()
            ]
        return cls(**values)


def init_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the package logger unless it already has one."""
    log = logging.getLogger(PACKAGE_LOGGER)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s"))
        log.addHandler(handler)
    log.setLevel(level)
    return log


def configure(settings: ClientSettings | None = None) -> ClientSettings:
    """Apply ``settings`` (or environment settings) to logging and return them."""
    settings = settings or ClientSettings.from_env()
    init_logging(settings.log_level)
    return settings
