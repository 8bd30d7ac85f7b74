"""Turn execution.

A :class:`TurnExecutor` wraps a pydantic-ai agent with:
- Thread history kept in a :class:`~relay_agents.threads.ThreadStore`
- Caller identity passed to tools as ``deps``
- A structured result schema for every turn
- Per-turn deadlines and error mapping

Basic Usage:
    >>> from relay_agents.agent import AgentConfig, Session, TurnExecutor
    >>> executor = TurnExecutor(
    ...     "google-gla:gemini-2.5-flash",
    ...     registry=build_weather_registry(),
    ...     output_type=WeatherReport,
    ... )
    >>> session = Session.create(executor, "1", user_id="1")
    >>> result = session.invoke_sync("What's the weather where I am?")
    >>> print(result.get("weather_summary"))

Classes:
    AgentConfig: Turn execution options
    TurnExecutor: Runs turns
    TurnResult: Structured result plus tool traces and usage
    Session: Thread + context bound to an executor
"""

from relay_agents.agent.config import AgentConfig
from relay_agents.agent.executor import TurnExecutor
from relay_agents.agent.result import ToolCallTrace, TurnResult, extract_tool_calls
from relay_agents.agent.session import Session

__all__ = [
    "AgentConfig",
    "Session",
    "ToolCallTrace",
    "TurnExecutor",
    "TurnResult",
    "extract_tool_calls",
]
