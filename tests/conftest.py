"""Shared test fixtures and configuration for relay-agents tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from pydantic_ai import models
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    ToolCallPart,
    ToolReturnPart,
    UserPromptPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel

from relay_agents.config import RelaySettings
from relay_agents.tools import CallContext, build_weather_registry

# Block all real model requests globally for safety
models.ALLOW_MODEL_REQUESTS = False

SPORT = "beach volleyball"
ATHLETE = "Alison Cerutti"


def last_request_parts(messages: list[ModelMessage]) -> list[Any]:
    """Return the parts of the newest request sent to the model."""
    for message in reversed(messages):
        if isinstance(message, ModelRequest):
            return list(message.parts)
    return []


def final_result(info: AgentInfo, **fields: Any) -> ModelResponse:
    """Build a response that calls the structured output tool."""
    return ModelResponse(parts=[ToolCallPart(info.output_tools[0].name, fields)])


class WeatherOracle:
    """Scripted stand-in for the hosted model in the weather scenario.

    Records every message list it receives so tests can inspect history.
    Individual answers can be overridden per prompt keyword.
    """

    # FunctionModel derives its model name from the callable's ``__name__``.
    __name__ = "weather_oracle"

    def __init__(self, overrides: dict[str, dict[str, Any]] | None = None) -> None:
        self.calls: list[list[ModelMessage]] = []
        self.overrides = overrides or {}
        self.skip_location = False

    def __call__(self, messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        self.calls.append(list(messages))
        parts = last_request_parts(messages)

        for part in parts:
            if isinstance(part, UserPromptPart):
                return self._answer_prompt(str(part.content), info)

        for part in parts:
            if isinstance(part, ToolReturnPart):
                if part.tool_name == "get_user_location":
                    return ModelResponse(
                        parts=[ToolCallPart("get_weather_for_location", {"city": part.content})]
                    )
                if part.tool_name == "get_weather_for_location":
                    summary = str(part.content).removeprefix("It's always ").rstrip("!")
                    fields = self.overrides.get("weather", {"weather_summary": summary})
                    return final_result(info, **fields)

        return final_result(info)

    def _answer_prompt(self, prompt: str, info: AgentInfo) -> ModelResponse:
        if "weather where I am" in prompt:
            if self.skip_location:
                return final_result(info, weather_summary="sunny")
            return ModelResponse(parts=[ToolCallPart("get_user_location", {})])
        if "what sport should I play" in prompt:
            return final_result(info, **self.overrides.get("sport", {"sport": SPORT}))
        if "Brazilian athlete" in prompt:
            return final_result(
                info, **self.overrides.get("athlete", {"best_brazilian_athlete": ATHLETE})
            )
        return final_result(info)

    def prompts(self) -> list[str]:
        """User prompts seen, in order."""
        seen: list[str] = []
        for messages in self.calls:
            for part in last_request_parts(messages):
                if isinstance(part, UserPromptPart):
                    seen.append(str(part.content))
        return seen


@pytest.fixture
def weather_oracle() -> WeatherOracle:
    """Provide a fresh scripted oracle."""
    return WeatherOracle()


@pytest.fixture
def oracle_factory() -> type[WeatherOracle]:
    """Factory fixture to build oracles with overridden answers.

    Usage:
        def test_something(oracle_factory):
            oracle = oracle_factory(overrides={"sport": {}})
    """
    return WeatherOracle


@pytest.fixture
def weather_model(weather_oracle: WeatherOracle) -> FunctionModel:
    """Provide a FunctionModel driven by the weather oracle."""
    return FunctionModel(weather_oracle)


@pytest.fixture
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RelaySettings:
    """Settings that ignore any .env or config.toml outside the test."""
    monkeypatch.chdir(tmp_path)
    return RelaySettings(_env_file=None)


@pytest.fixture
def home_context() -> CallContext:
    """Call context for the user whose location resolves to Santa Cruz."""
    return CallContext.for_user("1")


@pytest.fixture
def weather_registry():
    """Registry with the location and weather tools."""
    return build_weather_registry()


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for configuration tests.

    Returns the dict of set variables for assertions.
    """
    env_vars = {
        "RELAY_MODEL_BACKEND__BASE_URL": "http://test:8080/v1",
        "RELAY_MODEL_BACKEND__MODEL": "test-model",
        "RELAY_MODEL_BACKEND__API_KEY": "test-api-key",
        "RELAY_MODEL_BACKEND__TEMPERATURE": "0.3",
        "RELAY_LOGGING__LEVEL": "DEBUG",
        "RELAY_THREAD_ID": "thread-9",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def config_toml_content() -> str:
    """Provide sample TOML configuration content."""
    return """
thread_id = "from-toml"
user_id = "2"

[model_backend]
model = "openai:gpt-4o-mini"
timeout = 30.0

[logging]
level = "WARNING"
format = "structured"
"""


@pytest.fixture
def config_toml_file(tmp_path: Path, config_toml_content: str) -> Path:
    """Create a temporary TOML configuration file."""
    config_file = tmp_path / "config.toml"
    config_file.write_text(config_toml_content)
    return config_file


# Marker for integration tests
def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (may require external services)",
    )
