"""Fixed registry of named tools the model may call mid-turn."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel
from pydantic_ai.toolsets import FunctionToolset

from relay_agents.tools.context import CallContext
from relay_agents.tools.descriptor import ToolDescriptor, ToolHandler
from relay_agents.tools.errors import DuplicateToolError, ToolNotFoundError

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry mapping tool names to :class:`ToolDescriptor` instances.

    Names are unique: a second registration under the same name raises
    :class:`DuplicateToolError` immediately, so a misconfigured registry is
    rejected before any turn can run. Registration order is preserved.

    Example:
        >>> registry = ToolRegistry()
        >>> registry.register_tool(
        ...     "echo", "Echo text back", WeatherInput, lambda args, ctx: args.city
        ... )
        >>> registry.names()
        ['echo']
    """

    def __init__(self, descriptors: Iterable[ToolDescriptor] | None = None) -> None:
        """Initialize the registry.

        Args:
            descriptors: Optional descriptors to register up front.
        """
        self._tools: dict[str, ToolDescriptor] = {}
        if descriptors is not None:
            self.register_many(descriptors)

    def register(self, descriptor: ToolDescriptor) -> ToolDescriptor:
        """Register a descriptor.

        Args:
            descriptor: Descriptor to add.

        Returns:
            The registered descriptor.

        Raises:
            DuplicateToolError: If the name is already registered.
        """
        if descriptor.name in self._tools:
            raise DuplicateToolError(descriptor.name)
        self._tools[descriptor.name] = descriptor
        logger.debug("Registered tool %s", descriptor.name)
        return descriptor

    def register_tool(
        self,
        name: str,
        description: str,
        input_schema: type[BaseModel],
        handler: ToolHandler,
    ) -> ToolDescriptor:
        """Build and register a descriptor from its parts."""
        return self.register(
            ToolDescriptor(
                name=name,
                description=description,
                input_schema=input_schema,
                handler=handler,
            )
        )

    def register_many(self, descriptors: Iterable[ToolDescriptor]) -> None:
        """Register several descriptors, stopping at the first duplicate."""
        for descriptor in descriptors:
            self.register(descriptor)

    def get(self, name: str) -> ToolDescriptor:
        """Look up a descriptor by name.

        Raises:
            ToolNotFoundError: If no tool has that name.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name, available=self.names()) from None

    def names(self) -> list[str]:
        """Return registered tool names in registration order."""
        return list(self._tools)

    def invoke(
        self,
        name: str,
        raw_args: Mapping[str, Any] | None,
        context: CallContext,
    ) -> str:
        """Run a registered tool directly, outside a model turn."""
        return self.get(name).invoke(raw_args, context)

    def to_toolset(self, *, graceful_errors: bool = True) -> FunctionToolset[CallContext]:
        """Export the registry as a pydantic-ai toolset.

        Args:
            graceful_errors: Convert handler exceptions into ``ModelRetry``.

        Returns:
            A ``FunctionToolset`` with one tool per descriptor.
        """
        return FunctionToolset(
            [d.to_pydantic_tool(graceful_errors=graceful_errors) for d in self._tools.values()]
        )

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def __repr__(self) -> str:
        return f"ToolRegistry(tools={self.names()!r})"
