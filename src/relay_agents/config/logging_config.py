"""Logging configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LogFormat = Literal["plain", "structured", "rich"]


class LoggingConfig(BaseModel):
    """Logging settings.

    Attributes:
        level: Log level name for the ``relay_agents`` logger.
        format: ``plain`` text, ``structured`` JSON lines, or ``rich`` console output.
        redact_sensitive: Mask API keys and tokens in log messages.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    format: LogFormat = Field(
        default="plain",
        description="Log output format",
    )
    redact_sensitive: bool = Field(
        default=True,
        description="Mask API keys and tokens in log output",
    )
