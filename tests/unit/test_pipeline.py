"""Tests for the pipeline sequencer and prompt templates."""

from __future__ import annotations

import pytest
from pydantic_ai.models.function import FunctionModel

from relay_agents.agent import Session
from relay_agents.errors import ConfigurationError, MissingFieldError, MissingToolCallError
from relay_agents.pipeline import (
    Pipeline,
    PipelineHooks,
    PipelineStep,
    PromptTemplate,
    TemplateRenderError,
)
from relay_agents.scenario import WEATHER_STEPS, build_executor


@pytest.fixture
def session(weather_model, isolated_settings):
    executor = build_executor(weather_model, settings=isolated_settings)
    return Session.create(executor, "1", user_id="1")


class TestPromptTemplate:
    """Tests for PromptTemplate."""

    def test_render(self) -> None:
        """Variables are substituted."""
        template = PromptTemplate("sport", "Weather: {{ weather }}. Reply with sport only.")
        assert template.render(weather="sunny") == "Weather: sunny. Reply with sport only."

    def test_undefined_variable_raises(self) -> None:
        """A missing variable is an error, never empty text."""
        template = PromptTemplate("sport", "Weather: {{ weather }}.")
        with pytest.raises(TemplateRenderError) as exc_info:
            template.render()
        assert exc_info.value.name == "sport"

    def test_none_variable_raises(self) -> None:
        """A variable bound to None is rejected instead of rendering 'None'."""
        template = PromptTemplate("sport", "Weather: {{ weather }}.")
        with pytest.raises(TemplateRenderError):
            template.render(weather=None)

    def test_get_variables(self) -> None:
        """Referenced variable names are reported."""
        template = PromptTemplate("t", "{{ a }} and {{ b }}")
        assert template.get_variables() == {"a", "b"}


class TestPipelineConstruction:
    """Tests for Pipeline validation."""

    def test_empty_pipeline_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Pipeline([])

    def test_duplicate_step_names_rejected(self) -> None:
        steps = [PipelineStep("a", "x", "sport"), PipelineStep("a", "y", "sport")]
        with pytest.raises(ConfigurationError) as exc_info:
            Pipeline(steps)
        assert exc_info.value.actual == "a"

    def test_string_template_compiled(self) -> None:
        step = PipelineStep("a", "{{ previous }}", "sport", required_tools=["t"])
        assert isinstance(step.template, PromptTemplate)
        assert step.required_tools == ("t",)


class TestPipelineRun:
    """Tests for running pipelines."""

    @pytest.mark.asyncio
    async def test_fields_thread_through_prompts(self, session, weather_oracle) -> None:
        """Each prompt is built from the field extracted by the previous turn."""
        result = await Pipeline(WEATHER_STEPS).run(session)

        assert result.fields == {
            "weather_summary": "sunny in Santa Cruz, Brazil",
            "sport": "beach volleyball",
            "best_brazilian_athlete": "Alison Cerutti",
        }
        assert result.last == "Alison Cerutti"
        assert result["sport"] == "beach volleyball"
        assert len(result.turns) == 3
        assert weather_oracle.prompts() == [
            "What's the weather where I am? Reply with weather_summary only.",
            "Based on this weather, what sport should I play? "
            "Weather: sunny in Santa Cruz, Brazil. Reply with sport only.",
            "Name a top Brazilian athlete for this sport: beach volleyball. "
            "Reply with best_brazilian_athlete only.",
        ]

    @pytest.mark.asyncio
    async def test_history_grows_monotonically(self, session) -> None:
        """Every turn extends the shared thread."""
        counts: list[int] = []
        hooks = PipelineHooks(
            on_step_complete=lambda step, turn: counts.append(len(session.history()))
        )

        await Pipeline(WEATHER_STEPS, hooks=hooks).run(session)

        assert len(counts) == 3
        assert counts[0] < counts[1] < counts[2]

    @pytest.mark.asyncio
    async def test_missing_field_stops_pipeline(self, isolated_settings, oracle_factory) -> None:
        """A missing field fails fast; the next prompt is never sent."""
        oracle = oracle_factory(overrides={"sport": {}})
        executor = build_executor(FunctionModel(oracle), settings=isolated_settings)
        session = Session.create(executor, "1", user_id="1")
        errors: list[tuple[str, Exception]] = []
        hooks = PipelineHooks(on_pipeline_error=lambda step, exc: errors.append((step.name, exc)))

        with pytest.raises(MissingFieldError) as exc_info:
            await Pipeline(WEATHER_STEPS, hooks=hooks).run(session)

        assert exc_info.value.field == "sport"
        assert exc_info.value.step == "sport"
        assert len(oracle.prompts()) == 2
        assert not any("undefined" in p or "None" in p for p in oracle.prompts())
        assert [name for name, _ in errors] == ["sport"]

    @pytest.mark.asyncio
    async def test_blank_field_counts_as_missing(self, isolated_settings, oracle_factory) -> None:
        """An empty string is treated like an absent field."""
        oracle = oracle_factory(overrides={"athlete": {"best_brazilian_athlete": "  "}})
        executor = build_executor(FunctionModel(oracle), settings=isolated_settings)
        session = Session.create(executor, "1", user_id="1")

        with pytest.raises(MissingFieldError) as exc_info:
            await Pipeline(WEATHER_STEPS).run(session)

        assert exc_info.value.field == "best_brazilian_athlete"

    @pytest.mark.asyncio
    async def test_location_tool_skipped_fails_closed(self, session, weather_oracle) -> None:
        """The first step requires the location tool."""
        weather_oracle.skip_location = True

        with pytest.raises(MissingToolCallError):
            await Pipeline(WEATHER_STEPS).run(session)

        assert len(weather_oracle.prompts()) == 1

    @pytest.mark.asyncio
    async def test_function_templates(self, session, weather_oracle) -> None:
        """Prompt functions get no argument first and the prior field afterwards."""
        seen: list[object] = []

        def first() -> str:
            return "What's the weather where I am? Reply with weather_summary only."

        def second(previous: str) -> str:
            seen.append(previous)
            return f"Based on this weather, what sport should I play? Weather: {previous}."

        pipeline = Pipeline(
            [
                PipelineStep("weather", first, "weather_summary"),
                PipelineStep("sport", second, "sport"),
            ]
        )
        result = await pipeline.run(session)

        assert seen == ["sunny in Santa Cruz, Brazil"]
        assert result.last == "beach volleyball"

    @pytest.mark.asyncio
    async def test_hooks_order(self, session) -> None:
        """Hooks fire around every step in order."""
        log: list[str] = []
        hooks = PipelineHooks(
            on_pipeline_start=lambda steps: log.append(f"start:{len(steps)}"),
            on_step_start=lambda step, prompt: log.append(f"step_start:{step.name}"),
            on_step_complete=lambda step, turn: log.append(f"step_complete:{step.name}"),
            on_pipeline_complete=lambda result: log.append("complete"),
        )

        await Pipeline(WEATHER_STEPS, hooks=hooks).run(session)

        assert log == [
            "start:3",
            "step_start:weather",
            "step_complete:weather",
            "step_start:sport",
            "step_complete:sport",
            "step_start:athlete",
            "step_complete:athlete",
            "complete",
        ]

    def test_run_sync(self, session) -> None:
        """run_sync drives the pipeline without an event loop."""
        result = Pipeline(WEATHER_STEPS).run_sync(session)
        assert result.last == "Alison Cerutti"
