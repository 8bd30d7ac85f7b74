"""Prompt template exceptions."""

from __future__ import annotations


class PromptError(Exception):
    """Base exception for prompt-related errors."""


class TemplateRenderError(PromptError):
    """Raised when a prompt template fails to render."""

    def __init__(self, name: str, cause: Exception) -> None:
        """Initialize the error.

        Args:
            name: Template name that failed to render.
            cause: The underlying exception.
        """
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to render template '{name}': {cause}")

