"""Weather assistant tools."""

from __future__ import annotations

from pydantic import BaseModel, Field

from relay_agents.tools.context import CallContext
from relay_agents.tools.descriptor import NoInput, ToolDescriptor
from relay_agents.tools.registry import ToolRegistry

HOME_USER_ID = "1"
HOME_USER_LOCATION = "Santa Cruz, Brazil"
DEFAULT_LOCATION = "SF"


class WeatherInput(BaseModel):
    """Arguments for :func:`get_weather_for_location`."""

    city: str = Field(description="City to get the weather for")


def get_weather_for_location(arguments: WeatherInput, context: CallContext) -> str:
    """Return the (always sunny) weather for a city."""
    return f"It's always sunny in {arguments.city}!"


def get_user_location(arguments: NoInput, context: CallContext) -> str:
    """Resolve the caller's location from identity, not from model arguments."""
    if context.get("user_id") == HOME_USER_ID:
        return HOME_USER_LOCATION
    return DEFAULT_LOCATION


WEATHER_TOOL = ToolDescriptor(
    name="get_weather_for_location",
    description="Get the weather for a given city",
    input_schema=WeatherInput,
    handler=get_weather_for_location,
)

USER_LOCATION_TOOL = ToolDescriptor(
    name="get_user_location",
    description="Retrieve user information based on user ID",
    input_schema=NoInput,
    handler=get_user_location,
)


def build_weather_registry() -> ToolRegistry:
    """Create a registry holding the location and weather tools."""
    return ToolRegistry([USER_LOCATION_TOOL, WEATHER_TOOL])
