"""Settings and logging setup for applications embedding type_signals."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, field_validator

PACKAGE_LOGGER = "type_signals"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class Settings(BaseModel):
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from ``TYPE_SIGNALS_*`` environment variables."""
        values: dict[str, str] = {}
        level = os.environ.get("TYPE_SIGNALS_LOG_LEVEL")
        if level:
            values["log_level"] = level
        fmt = os.environ.get("TYPE_SIGNALS_LOG_FORMAT")
        if fmt:
            values["log_format"] = fmt
        return cls(**values)


def configure_logging(
    level: str | None = None, settings: Settings | None = None
) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Safe to call more than once; the previous handler is replaced rather than
    stacked. Returns the configured package logger.
    """
    settings = settings or Settings.from_env()
    if level is not None:
        settings = settings.model_copy(
            update={"log_level": Settings(log_level=level).log_level}
        )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, "_type_signals", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(settings.log_format))
    handler._type_signals = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
    package_logger.setLevel(settings.log_level)
    return package_logger
