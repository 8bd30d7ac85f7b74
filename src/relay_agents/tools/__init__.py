"""Tool registry and context-aware tools.

Tools receive two separate inputs: arguments supplied by the model and
validated against the tool's input schema, and a :class:`CallContext`
supplied by the caller that the model never sees.

Example:
    >>> from relay_agents.tools import CallContext, build_weather_registry
    >>> registry = build_weather_registry()
    >>> registry.invoke("get_user_location", {}, CallContext.for_user("1"))
    'Santa Cruz, Brazil'
"""

from relay_agents.tools.context import CallContext
from relay_agents.tools.descriptor import NoInput, ToolDescriptor, ToolHandler
from relay_agents.tools.errors import (
    DuplicateToolError,
    ToolError,
    ToolNotFoundError,
    ToolValidationError,
)
from relay_agents.tools.registry import ToolRegistry
from relay_agents.tools.weather import (
    USER_LOCATION_TOOL,
    WEATHER_TOOL,
    WeatherInput,
    build_weather_registry,
    get_user_location,
    get_weather_for_location,
)

__all__ = [
    "USER_LOCATION_TOOL",
    "WEATHER_TOOL",
    "CallContext",
    "DuplicateToolError",
    "NoInput",
    "ToolDescriptor",
    "ToolError",
    "ToolHandler",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolValidationError",
    "WeatherInput",
    "build_weather_registry",
    "get_user_location",
    "get_weather_for_location",
]
