"""Tool subsystem exceptions."""

from __future__ import annotations


class ToolError(Exception):
    """Base exception for all tool-related errors.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class DuplicateToolError(ToolError):
    """Raised when a tool name is registered twice in the same registry.

    Attributes:
        name: The conflicting tool name.
    """

    def __init__(self, name: str) -> None:
        """Initialize the error.

        Args:
            name: The conflicting tool name.
        """
        self.name = name
        super().__init__(f"duplicate tool name: '{name}'")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name,))


class ToolNotFoundError(ToolError):
    """Raised when a tool name is not in the registry.

    Attributes:
        name: Tool name that was looked up.
        available: Names registered at lookup time.
    """

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        """Initialize the error.

        Args:
            name: Tool name that was looked up.
            available: Names registered at lookup time.
        """
        self.name = name
        self.available = list(available) if available is not None else []
        available_str = f" (available: {', '.join(self.available)})" if self.available else ""
        super().__init__(f"Tool '{name}' not found{available_str}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, self.available))


class ToolValidationError(ToolError):
    """Raised when a tool descriptor or its arguments are invalid.

    Attributes:
        name: Tool name, if known.
        errors: Validation error messages.
    """

    def __init__(self, name: str, errors: list[str]) -> None:
        """Initialize the error.

        Args:
            name: Tool name, if known.
            errors: Validation error messages.
        """
        self.name = name
        self.errors = list(errors)
        super().__init__(f"Validation failed for tool '{name}': {'; '.join(self.errors)}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.name, self.errors))
