"""Logging utilities."""

from relay_agents.observability.logging import (
    SensitiveDataFilter,
    StructuredFormatter,
    redact,
    setup_logging,
)

__all__ = [
    "SensitiveDataFilter",
    "StructuredFormatter",
    "redact",
    "setup_logging",
]
