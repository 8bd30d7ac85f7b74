"""Conversation thread persistence."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from relay_agents.threads.serialization import dicts_to_model_messages, model_messages_to_dicts

if TYPE_CHECKING:
    from pydantic_ai.messages import ModelMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversationThread:
    """One logical conversation.

    All turns sharing a ``thread_id`` share the history kept by the store.

    Attributes:
        thread_id: Stable key into the thread store.
    """

    thread_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.thread_id, str) or not self.thread_id:
            raise ValueError("thread_id must be a non-empty string")

    def __str__(self) -> str:
        return self.thread_id


class ThreadStore(ABC):
    """Key-value checkpoint store: thread id to an ordered message log.

    Implementations also hand out one ``asyncio.Lock`` per thread so that
    at most one turn is in flight against a thread at any time.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def lock(self, thread_id: str) -> asyncio.Lock:
        """Return the lock serializing turns for ``thread_id``."""
        if thread_id not in self._locks:
            self._locks[thread_id] = asyncio.Lock()
        return self._locks[thread_id]

    @abstractmethod
    def read(self, thread_id: str) -> list[ModelMessage]:
        """Return all messages for a thread, oldest first (empty if unknown)."""

    @abstractmethod
    def append(self, thread_id: str, messages: list[ModelMessage]) -> None:
        """Append messages to a thread, creating it on first use."""

    @abstractmethod
    def clear(self, thread_id: str) -> None:
        """Drop all messages for a thread."""

    @abstractmethod
    def thread_ids(self) -> list[str]:
        """Return the ids of all known threads."""

    def message_count(self, thread_id: str) -> int:
        """Return how many messages a thread holds."""
        return len(self.read(thread_id))


class InMemoryThreadStore(ThreadStore):
    """Unbounded in-memory thread store.

    Messages are kept as dicts, so callers always receive fresh message
    objects and cannot mutate stored history by accident.
    """

    def __init__(self) -> None:
        super().__init__()
        self._threads: dict[str, list[dict[str, Any]]] = {}

    def read(self, thread_id: str) -> list[ModelMessage]:
        data = self._threads.get(thread_id)
        if not data:
            return []
        return dicts_to_model_messages(data)

    def append(self, thread_id: str, messages: list[ModelMessage]) -> None:
        if not messages:
            return
        log = self._threads.setdefault(thread_id, [])
        log.extend(model_messages_to_dicts(messages))
        logger.debug("Thread %s now holds %d messages", thread_id, len(log))

    def clear(self, thread_id: str) -> None:
        self._threads.pop(thread_id, None)

    def thread_ids(self) -> list[str]:
        return list(self._threads)

    def message_count(self, thread_id: str) -> int:
        return len(self._threads.get(thread_id, []))
