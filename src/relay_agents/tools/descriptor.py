"""Tool descriptors and their conversion to pydantic-ai tools."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_ai import ModelRetry, RunContext, Tool

from relay_agents.tools.context import CallContext
from relay_agents.tools.errors import ToolValidationError

logger = logging.getLogger(__name__)

ToolHandler = Callable[[Any, CallContext], str]


class NoInput(BaseModel):
    """Input schema for tools that take no model-supplied arguments."""

    model_config = ConfigDict(extra="forbid")


def with_graceful_errors(name: str, handler: ToolHandler) -> ToolHandler:
    """Wrap a handler so exceptions become ``ModelRetry``.

    The model then receives the error text and may try again with other
    arguments instead of the whole run crashing.

    Args:
        name: Tool name, used for logging.
        handler: The handler to wrap.

    Returns:
        Wrapped handler.
    """

    @functools.wraps(handler)
    def wrapper(arguments: Any, context: CallContext) -> str:
        try:
            return handler(arguments, context)
        except ModelRetry:
            raise
        except Exception as exc:
            error_msg = f"{type(exc).__name__}: {exc}"
            logger.debug("Tool %s raised %s, converting to ModelRetry", name, error_msg)
            raise ModelRetry(error_msg) from exc

    return wrapper


@dataclass(frozen=True)
class ToolDescriptor:
    """A named capability the model may call mid-turn.

    A descriptor keeps two parameter channels apart: ``input_schema`` is
    what the model sees and must supply, while the :class:`CallContext`
    comes from the caller and is handed to ``handler`` untouched.

    Attributes:
        name: Unique tool name.
        description: Description shown to the model.
        input_schema: Pydantic model describing the model-supplied arguments.
        handler: ``handler(parsed_input, call_context) -> str``.
    """

    name: str
    description: str
    input_schema: type[BaseModel]
    handler: ToolHandler

    def __post_init__(self) -> None:
        errors: list[str] = []
        if not isinstance(self.name, str) or not self.name.strip():
            errors.append("name must be a non-empty string")
        if not (inspect.isclass(self.input_schema) and issubclass(self.input_schema, BaseModel)):
            errors.append("input_schema must be a pydantic BaseModel subclass")
        if not callable(self.handler):
            errors.append("handler must be callable")
        if errors:
            raise ToolValidationError(str(self.name), errors)

    def parse_input(self, raw_args: Mapping[str, Any] | None) -> BaseModel:
        """Validate model-supplied arguments against ``input_schema``.

        Raises:
            ToolValidationError: If the arguments do not match the schema.
        """
        try:
            return self.input_schema.model_validate(dict(raw_args or {}))
        except ValidationError as exc:
            raise ToolValidationError(
                self.name, [f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()]
            ) from exc

    def invoke(self, raw_args: Mapping[str, Any] | None, context: CallContext) -> str:
        """Validate ``raw_args`` and run the handler with ``context``."""
        return self.handler(self.parse_input(raw_args), context)

    def to_pydantic_tool(self, *, graceful_errors: bool = True) -> Tool[CallContext]:
        """Build the pydantic-ai tool for this descriptor.

        The generated function takes ``RunContext[CallContext]`` plus a single
        argument typed as ``input_schema``, so the JSON schema shown to the
        model is exactly the input schema and the context stays out of it.

        Args:
            graceful_errors: Convert handler exceptions into ``ModelRetry``.

        Returns:
            A pydantic-ai ``Tool`` taking the call context.
        """
        handler = with_graceful_errors(self.name, self.handler) if graceful_errors else self.handler

        def run(ctx, arguments):
            return handler(arguments, ctx.deps)

        run.__name__ = self.name
        run.__qualname__ = self.name
        run.__doc__ = None
        run.__annotations__ = {
            "ctx": RunContext[CallContext],
            "arguments": self.input_schema,
            "return": str,
        }
        run.__signature__ = inspect.Signature(
            parameters=[
                inspect.Parameter(
                    "ctx",
                    inspect.Parameter.POSITIONAL_OR_KEYWORD,
                    annotation=RunContext[CallContext],
                ),
                inspect.Parameter(
                    "arguments",
                    inspect.Parameter.POSITIONAL_OR_KEYWORD,
                    annotation=self.input_schema,
                ),
            ],
            return_annotation=str,
        )

        return Tool(
            run,
            takes_ctx=True,
            name=self.name,
            description=self.description,
        )
