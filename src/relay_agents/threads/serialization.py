"""Conversion between pydantic-ai messages and JSON-able dicts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic_ai.messages import ModelMessagesTypeAdapter

if TYPE_CHECKING:
    from pydantic_ai.messages import ModelMessage


def model_messages_to_dicts(messages: list[ModelMessage]) -> list[dict[str, Any]]:
    """Dump pydantic-ai messages to plain dicts.

    Args:
        messages: Messages from a run (e.g. ``result.new_messages()``).

    Returns:
        JSON-compatible dicts, one per message.
    """
    return ModelMessagesTypeAdapter.dump_python(messages, mode="json")


def dicts_to_model_messages(data: list[dict[str, Any]]) -> list[ModelMessage]:
    """Rebuild pydantic-ai messages from dicts produced by :func:`model_messages_to_dicts`."""
    return ModelMessagesTypeAdapter.validate_python(data)
