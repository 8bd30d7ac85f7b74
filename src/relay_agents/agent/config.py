"""Turn executor configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AgentConfig(BaseModel):
    """Configuration for turn execution.

    Attributes:
        system_prompt: System prompt sent at the start of every thread.
        graceful_tool_errors: Convert tool exceptions to ``ModelRetry`` so
            the model sees the error text instead of the run crashing.
        turn_timeout_seconds: Deadline for one turn. ``None`` falls back to
            the model backend timeout from settings.
        output_retries: How often the model may retry a reply that fails
            structured-output validation before the turn fails.
    """

    system_prompt: str = Field(
        default="",
        description="System prompt for the agent",
    )
    graceful_tool_errors: bool = Field(
        default=True,
        description="Convert tool exceptions to ModelRetry for LLM recovery",
    )
    turn_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Deadline for one turn in seconds",
    )
    output_retries: int = Field(
        default=1,
        ge=0,
        description="Retries allowed for structured output validation",
    )
