"""Turn results and tool call traces."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic_ai.messages import ModelRequest, ModelResponse, ToolCallPart, ToolReturnPart

from relay_agents.errors import MissingFieldError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pydantic_ai.messages import ModelMessage

    from relay_agents.tokens.tracker import UsageRecord


@dataclass
class ToolCallTrace:
    """One tool invocation observed during a turn.

    Attributes:
        tool_name: Name of the tool that was called.
        args: Arguments the model supplied.
        result: Text returned to the model, or ``None`` if no return was seen.
        tool_call_id: Provider call id linking the call to its return.
    """

    tool_name: str
    args: dict[str, Any]
    result: str | None = None
    tool_call_id: str | None = None


def extract_tool_calls(
    messages: list[ModelMessage],
    tool_names: Iterable[str],
) -> list[ToolCallTrace]:
    """Pair tool calls with their returns.

    Only tools in ``tool_names`` are reported, which leaves out the
    output tool pydantic-ai uses for structured results.

    Args:
        messages: Messages produced by a run.
        tool_names: Names of the registered tools.

    Returns:
        Traces in call order.
    """
    names = set(tool_names)
    traces: list[ToolCallTrace] = []
    by_id: dict[str, ToolCallTrace] = {}

    for message in messages:
        if isinstance(message, ModelResponse):
            for part in message.parts:
                if isinstance(part, ToolCallPart) and part.tool_name in names:
                    trace = ToolCallTrace(
                        tool_name=part.tool_name,
                        args=part.args_as_dict(),
                        tool_call_id=part.tool_call_id,
                    )
                    traces.append(trace)
                    by_id[part.tool_call_id] = trace
        elif isinstance(message, ModelRequest):
            for part in message.parts:
                if isinstance(part, ToolReturnPart) and part.tool_call_id in by_id:
                    content = part.content
                    by_id[part.tool_call_id].result = (
                        content if isinstance(content, str) else part.model_response_str()
                    )

    return traces


OutputT = TypeVar("OutputT")


@dataclass
class TurnResult(Generic[OutputT]):
    """Outcome of a single turn.

    Attributes:
        output: Structured result conforming to the executor's output type.
        thread_id: Thread the turn ran against.
        prompt: User message that started the turn.
        tool_calls: Tools the model invoked during the turn.
        new_messages: Messages appended to the thread by this turn.
        usage: Token usage of the turn.
    """

    output: OutputT
    thread_id: str
    prompt: str
    tool_calls: list[ToolCallTrace] = field(default_factory=list)
    new_messages: list[ModelMessage] = field(default_factory=list)
    usage: UsageRecord | None = None

    def get(self, name: str) -> Any | None:
        """Read one structured field, ``None`` when the model left it out."""
        if isinstance(self.output, Mapping):
            return self.output.get(name)
        return getattr(self.output, name, None)

    def require(self, name: str, *, step: str | None = None) -> Any:
        """Read one structured field, failing when it is absent or blank.

        Raises:
            MissingFieldError: If the field is ``None`` or an empty string.
        """
        value = self.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise MissingFieldError(name, step=step, thread_id=self.thread_id)
        return value

    def called(self, tool_name: str) -> bool:
        """Return True if ``tool_name`` was invoked during the turn."""
        return any(trace.tool_name == tool_name for trace in self.tool_calls)
