"""Custom exception hierarchy for relay-agents."""

from __future__ import annotations

from typing import Any, ClassVar


class RelayError(Exception):
    """Base exception for all relay-agents errors.

    All custom exceptions raised by turns and pipelines inherit from this
    class, so a caller can stop on any of them with a single handler.

    Attributes:
        message: Human-readable error message.
        cause: Original exception that caused this error.
        details: Additional error context as key-value pairs.

    Details can be accessed as attributes (e.g., error.thread_id).
    """

    # Map attribute names to default values when not in details
    _defaults: ClassVar[dict[str, Any]] = {}

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        **details: Any,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            cause: Original exception that caused this error.
            **details: Additional error context.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details

    def __getattr__(self, name: str) -> Any:
        """Access details as attributes."""
        if name in ("details", "message", "cause"):
            raise AttributeError(name)
        if name in self.details:
            return self.details[name]
        if name in self._defaults:
            return self._defaults[name]
        raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")

    def __str__(self) -> str:
        """Return string representation."""
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class ConfigurationError(RelayError):
    """Error in settings or pipeline wiring.

    Attributes from details: config_key, expected, actual.
    """


class ModelBackendError(RelayError):
    """Error from the model backend.

    Raised when the hosted model API returns an error status or is
    unreachable. Never retried inside a turn; an unreachable backend is
    marked retryable so the caller may run the turn again.

    Attributes from details: model, status_code, response_body, retryable (default: False).
    """

    _defaults: ClassVar[dict[str, Any]] = {"retryable": False}


class RateLimitError(ModelBackendError):
    """Rate limit exceeded.

    The caller may retry the whole turn.

    Attributes from details: retry_after.
    """

    _defaults: ClassVar[dict[str, Any]] = {"retryable": True}

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class TurnTimeoutError(RelayError):
    """A turn exceeded its deadline.

    Attributes from details: timeout_seconds, thread_id.
    """


class StructuredOutputError(RelayError):
    """The model reply could not be coerced to the structured result schema.

    Terminal for the turn.

    Attributes from details: thread_id, output_type.
    """


class MissingFieldError(RelayError):
    """A structured result lacks a field that a later step depends on.

    Attributes from details: field, step.
    """

    def __init__(self, field: str, *, step: str | None = None, **kwargs: Any) -> None:
        where = f" (step '{step}')" if step else ""
        super().__init__(
            f"Missing required field from prior structured result: '{field}'{where}",
            field=field,
            step=step,
            **kwargs,
        )


class MissingToolCallError(RelayError):
    """A turn finished without calling a tool it was required to call.

    Attributes from details: missing, called, thread_id.
    """


class ToolRetriesExceededError(RelayError):
    """A tool kept failing until the model ran out of retries for it.

    Attributes from details: tool_name, thread_id.
    """
