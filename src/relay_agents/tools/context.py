"""Caller-supplied context passed to tools alongside model arguments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class CallContext:
    """Identity and environment data supplied by the caller for one turn.

    The context travels to tools as pydantic-ai ``deps`` and is never part
    of the model-visible tool schema. Tools read it; they cannot change it.

    Attributes:
        identity: Read-only mapping of identity fields (e.g. ``user_id``).

    Example:
        >>> ctx = CallContext.for_user("1")
        >>> ctx.get("user_id")
        '1'
    """

    identity: Mapping[str, Any] = field(default_factory=dict)

    # Identity values may be unhashable
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "identity", MappingProxyType(dict(self.identity)))

    @classmethod
    def for_user(cls, user_id: str, **extra: Any) -> CallContext:
        """Create a context for a single user identifier."""
        return cls(identity={"user_id": user_id, **extra})

    def get(self, key: str, default: Any = None) -> Any:
        """Look up an identity field, returning ``default`` when absent."""
        return self.identity.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.identity
