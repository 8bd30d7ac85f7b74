"""
Relay Agents - sequential multi-turn pipelines on top of pydantic-ai.

Quick Start:
    >>> from relay_agents import Session, TurnExecutor, build_weather_registry
    >>> executor = TurnExecutor(
    ...     "google-gla:gemini-2.5-flash",
    ...     registry=build_weather_registry(),
    ...     output_type=WeatherReport,
    ... )
    >>> session = Session.create(executor, "1", user_id="1")
    >>> result = session.invoke_sync("What's the weather where I am?")
    >>> result.get("weather_summary")

Pipelines:
    >>> from relay_agents import Pipeline, PipelineStep
    >>> pipeline = Pipeline([
    ...     PipelineStep("weather", "What's the weather where I am?", "weather_summary"),
    ...     PipelineStep("sport", "Weather: {{ previous }}. Reply with sport only.", "sport"),
    ... ])
    >>> pipeline.run_sync(session).fields

Key Features:
    - Tool registry with duplicate-name rejection
    - Caller context passed to tools separately from model arguments
    - Thread history in a pluggable checkpoint store
    - Structured results with explicit field extraction
    - Per-turn deadlines and typed errors
"""

from relay_agents.agent import AgentConfig, Session, ToolCallTrace, TurnExecutor, TurnResult
from relay_agents.config import RelaySettings
from relay_agents.errors import (
    MissingFieldError,
    MissingToolCallError,
    ModelBackendError,
    RateLimitError,
    RelayError,
    StructuredOutputError,
    ToolRetriesExceededError,
    TurnTimeoutError,
)
from relay_agents.observability import setup_logging
from relay_agents.pipeline import Pipeline, PipelineHooks, PipelineResult, PipelineStep
from relay_agents.threads import ConversationThread, InMemoryThreadStore, ThreadStore
from relay_agents.tools import (
    CallContext,
    DuplicateToolError,
    ToolDescriptor,
    ToolRegistry,
    build_weather_registry,
)

__all__ = [
    "AgentConfig",
    "CallContext",
    "ConversationThread",
    "DuplicateToolError",
    "InMemoryThreadStore",
    "MissingFieldError",
    "MissingToolCallError",
    "ModelBackendError",
    "Pipeline",
    "PipelineHooks",
    "PipelineResult",
    "PipelineStep",
    "RateLimitError",
    "RelayError",
    "RelaySettings",
    "Session",
    "StructuredOutputError",
    "ThreadStore",
    "ToolCallTrace",
    "ToolRetriesExceededError",
    "ToolDescriptor",
    "ToolRegistry",
    "TurnExecutor",
    "TurnResult",
    "TurnTimeoutError",
    "build_weather_registry",
    "setup_logging",
    "__version__",
]

__version__ = "0.1.0"
