"""Token usage tracking across turns."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic_ai.usage import RunUsage


@dataclass
class UsageRecord:
    """Usage of a single turn.

    Attributes:
        timestamp: When the usage was recorded.
        prompt_tokens: Tokens sent to the model.
        completion_tokens: Tokens generated by the model.
        total_tokens: Total tokens used.
        requests: Model requests made during the turn (tool round-trips included).
        model: Model used for this turn.
        thread_id: Thread the turn belonged to.
    """

    timestamp: datetime
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    requests: int = 1
    model: str | None = None
    thread_id: str | None = None


@dataclass
class TokenUsage:
    """Aggregate token usage statistics.

    Attributes:
        prompt_tokens: Total prompt tokens.
        completion_tokens: Total completion tokens.
        total_tokens: Total tokens.
        request_count: Number of model requests.
        turn_count: Number of turns recorded.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    request_count: int = 0
    turn_count: int = 0

    def add(self, record: UsageRecord) -> None:
        """Fold a record into the aggregate."""
        self.prompt_tokens += record.prompt_tokens
        self.completion_tokens += record.completion_tokens
        self.total_tokens += record.total_tokens
        self.request_count += record.requests
        self.turn_count += 1


def usage_to_record(
    usage: RunUsage | Any,
    model: str | None = None,
    thread_id: str | None = None,
) -> UsageRecord:
    """Build a :class:`UsageRecord` from a pydantic-ai usage object."""
    # Newer pydantic-ai names first, then the deprecated ones
    prompt_tokens = (
        getattr(usage, "input_tokens", None) or getattr(usage, "request_tokens", None) or 0
    )
    completion_tokens = (
        getattr(usage, "output_tokens", None) or getattr(usage, "response_tokens", None) or 0
    )
    total_tokens = getattr(usage, "total_tokens", None) or (prompt_tokens + completion_tokens)
    return UsageRecord(
        timestamp=datetime.now(),
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        total_tokens=total_tokens,
        requests=getattr(usage, "requests", None) or 1,
        model=model,
        thread_id=thread_id,
    )


class UsageTracker:
    """Track token usage per turn, in aggregate and per thread."""

    def __init__(self) -> None:
        self._records: list[UsageRecord] = []
        self._totals = TokenUsage()
        self._thread_totals: dict[str, TokenUsage] = {}

    def record_usage(
        self,
        usage: RunUsage | Any,
        model: str | None = None,
        thread_id: str | None = None,
    ) -> UsageRecord:
        """Record usage from a pydantic-ai run result.

        Args:
            usage: ``result.usage()`` from pydantic-ai.
            model: Optional model name.
            thread_id: Thread the turn ran against.

        Returns:
            The stored record.
        """
        record = usage_to_record(usage, model=model, thread_id=thread_id)
        self._records.append(record)
        self._totals.add(record)
        if thread_id is not None:
            self._thread_totals.setdefault(thread_id, TokenUsage()).add(record)
        return record

    def get_total_usage(self) -> TokenUsage:
        """Get a snapshot of aggregate usage over every recorded turn."""
        return replace(self._totals)

    def get_thread_usage(self, thread_id: str) -> TokenUsage:
        """Get a snapshot of aggregate usage for one thread (zeros if unknown)."""
        return replace(self._thread_totals.get(thread_id, TokenUsage()))

    def get_usage_history(self) -> list[UsageRecord]:
        """Get a copy of all usage records, oldest first."""
        return self._records.copy()

    def reset(self) -> None:
        """Reset all tracking data."""
        self._records.clear()
        self._totals = TokenUsage()
        self._thread_totals.clear()
