"""Error handling.

Every failure in a turn or pipeline surfaces to the caller; nothing here
retries or recovers locally.
"""

from relay_agents.errors.exceptions import (
    ConfigurationError,
    MissingFieldError,
    MissingToolCallError,
    ModelBackendError,
    RateLimitError,
    RelayError,
    StructuredOutputError,
    ToolRetriesExceededError,
    TurnTimeoutError,
)

__all__ = [
    "ConfigurationError",
    "MissingFieldError",
    "MissingToolCallError",
    "ModelBackendError",
    "RateLimitError",
    "RelayError",
    "StructuredOutputError",
    "ToolRetriesExceededError",
    "TurnTimeoutError",
]
