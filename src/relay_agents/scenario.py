"""Weather scenario: three chained turns summarized in three sentences.

1. Ask for the weather without naming a place; the model resolves the
   caller's location through ``get_user_location``.
2. Ask which sport suits that weather.
3. Ask for a top Brazilian athlete in that sport.

Run with ``relay-weather`` or ``python -m relay_agents``.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from relay_agents.agent import AgentConfig, Session, TurnExecutor
from relay_agents.config import RelaySettings
from relay_agents.errors import MissingFieldError
from relay_agents.observability import setup_logging
from relay_agents.pipeline import Pipeline, PipelineHooks, PipelineStep
from relay_agents.tools import USER_LOCATION_TOOL, build_weather_registry

if TYPE_CHECKING:
    from pydantic_ai.models import Model

    from relay_agents.threads import ThreadStore

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a concise weather assistant.
You have access to two tools:
- get_weather_for_location: use this to get the weather for a specific location
- get_user_location: use this to get the user's location
If a user asks you for the weather, make sure you know the location. \
If you can tell from the question that they mean wherever they are, \
use the get_user_location tool to find their location."""


class WeatherReport(BaseModel):
    """Structured result requested on every turn; each field is optional."""

    weather_summary: str | None = Field(default=None, description="Short weather summary")
    good_for_sport: bool | None = Field(default=None, description="Whether it suits sport")
    sport: str | None = Field(default=None, description="A sport suited to the weather")
    best_brazilian_athlete: str | None = Field(
        default=None, description="A top Brazilian athlete in the sport"
    )


WEATHER_STEPS = (
    PipelineStep(
        name="weather",
        template="What's the weather where I am? Reply with weather_summary only.",
        output_field="weather_summary",
        required_tools=(USER_LOCATION_TOOL.name,),
    ),
    PipelineStep(
        name="sport",
        template=(
            "Based on this weather, what sport should I play? "
            "Weather: {{ weather_summary }}. Reply with sport only."
        ),
        output_field="sport",
    ),
    PipelineStep(
        name="athlete",
        template=(
            "Name a top Brazilian athlete for this sport: {{ sport }}. "
            "Reply with best_brazilian_athlete only."
        ),
        output_field="best_brazilian_athlete",
    ),
)

SUMMARY_FIELDS = ("weather_summary", "sport", "best_brazilian_athlete")


def format_summary(fields: Mapping[str, Any]) -> str:
    """Render the three-sentence summary.

    Raises:
        MissingFieldError: If any summary field is absent or blank.
    """
    for name in SUMMARY_FIELDS:
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingFieldError(name, step="summary")

    weather = fields["weather_summary"]
    sport = fields["sport"]
    athlete = fields["best_brazilian_athlete"]
    return (
        f"The weather is {weather}. A good sport to play is {sport}. "
        f"A top Brazilian athlete in {sport} is {athlete}."
    )


def build_executor(
    model: str | Model | None = None,
    *,
    settings: RelaySettings | None = None,
    store: ThreadStore | None = None,
) -> TurnExecutor[WeatherReport]:
    """Create the weather executor with both tools and the report schema."""
    return TurnExecutor(
        model,
        registry=build_weather_registry(),
        output_type=WeatherReport,
        store=store,
        config=AgentConfig(system_prompt=SYSTEM_PROMPT),
        settings=settings,
    )


async def run_scenario(
    model: str | Model | None = None,
    *,
    settings: RelaySettings | None = None,
    hooks: PipelineHooks | None = None,
) -> str:
    """Run the three turns and return the summary line.

    Args:
        model: Model override; defaults to ``settings.model_backend``.
        settings: Settings supplying model, thread id and user id.
        hooks: Optional pipeline hooks.

    Returns:
        The three-sentence summary.
    """
    settings = settings or RelaySettings()
    executor = build_executor(model, settings=settings)
    session = Session.create(executor, settings.thread_id, user_id=settings.user_id)

    result = await Pipeline(WEATHER_STEPS, hooks=hooks).run(session)
    usage = session.usage
    logger.info(
        "Scenario finished: %d turns, %d requests, %d tokens",
        usage.turn_count,
        usage.request_count,
        usage.total_tokens,
    )
    return format_summary(result.fields)


def main() -> int:
    """Run the scenario, print one line on success, log and return 1 on failure."""
    setup_logging()
    try:
        settings = RelaySettings()
        setup_logging(settings.logging)
        summary = asyncio.run(run_scenario(settings=settings))
    except Exception:
        logger.exception("Weather scenario failed")
        return 1

    print(summary)
    return 0


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())
