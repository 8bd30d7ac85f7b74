"""Tests for the exception hierarchy."""

from __future__ import annotations

import pickle

import pytest

from relay_agents.errors import (
    ConfigurationError,
    MissingFieldError,
    MissingToolCallError,
    ModelBackendError,
    RateLimitError,
    RelayError,
    StructuredOutputError,
    ToolRetriesExceededError,
    TurnTimeoutError,
)
from relay_agents.tools import DuplicateToolError, ToolError, ToolNotFoundError


class TestRelayError:
    """Tests for RelayError."""

    def test_details_as_attributes(self) -> None:
        """Test keyword details are readable as attributes."""
        error = RelayError("failed", thread_id="1", step="sport")

        assert error.thread_id == "1"
        assert error.step == "sport"
        assert error.details == {"thread_id": "1", "step": "sport"}

    def test_unknown_attribute(self) -> None:
        """Test a missing detail raises AttributeError."""
        with pytest.raises(AttributeError, match="nothing"):
            RelayError("failed").nothing

    def test_str_includes_cause(self) -> None:
        """Test the cause is shown after the message."""
        error = RelayError("turn failed", cause=ValueError("bad reply"))

        assert str(error) == "turn failed (caused by: bad reply)"
        assert str(RelayError("plain")) == "plain"

    @pytest.mark.parametrize(
        "error_cls",
        [
            ConfigurationError,
            ModelBackendError,
            RateLimitError,
            TurnTimeoutError,
            StructuredOutputError,
            MissingToolCallError,
            ToolRetriesExceededError,
        ],
    )
    def test_subclasses(self, error_cls: type[RelayError]) -> None:
        """Test every turn failure is caught by one handler."""
        with pytest.raises(RelayError):
            raise error_cls("failed")


class TestModelBackendErrors:
    """Tests for backend error retryability."""

    def test_backend_error_not_retryable(self) -> None:
        assert ModelBackendError("HTTP 503", status_code=503).retryable is False

    def test_rate_limit_retryable(self) -> None:
        error = RateLimitError("HTTP 429", status_code=429)

        assert isinstance(error, ModelBackendError)
        assert error.retryable is True
        assert error.status_code == 429


class TestMissingFieldError:
    """Tests for MissingFieldError."""

    def test_message_names_field_and_step(self) -> None:
        error = MissingFieldError("sport", step="sport")

        assert str(error) == (
            "Missing required field from prior structured result: 'sport' (step 'sport')"
        )
        assert error.field == "sport"
        assert error.step == "sport"

    def test_message_without_step(self) -> None:
        error = MissingFieldError("weather_summary")

        assert str(error) == (
            "Missing required field from prior structured result: 'weather_summary'"
        )
        assert error.step is None


class TestToolErrors:
    """Tests for tool errors."""

    def test_duplicate_message(self) -> None:
        error = DuplicateToolError("get_weather_for_location")

        assert isinstance(error, ToolError)
        assert "duplicate tool name" in str(error)
        assert error.name == "get_weather_for_location"

    def test_not_found_lists_available(self) -> None:
        error = ToolNotFoundError("nope", ["get_user_location"])

        assert str(error) == "Tool 'nope' not found (available: get_user_location)"

    def test_pickle(self) -> None:
        """Test tool errors survive pickling."""
        restored = pickle.loads(pickle.dumps(ToolNotFoundError("nope", ["a", "b"])))

        assert restored.name == "nope"
        assert restored.available == ["a", "b"]
