"""Caller-owned conversation session."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from relay_agents.threads.store import ConversationThread
from relay_agents.tools.context import CallContext

if TYPE_CHECKING:
    from pydantic_ai.messages import ModelMessage

    from relay_agents.agent.executor import TurnExecutor
    from relay_agents.agent.result import TurnResult
    from relay_agents.tokens.tracker import TokenUsage


OutputT = TypeVar("OutputT")


@dataclass
class Session(Generic[OutputT]):
    """One thread and one call context bound to an executor.

    The session is created and owned by the caller and passed explicitly to
    whatever runs turns, so the model, the checkpoint store and the thread
    have a single, visible owner.

    Attributes:
        executor: Executor that runs the turns.
        thread: Conversation thread all turns share.
        context: Caller identity supplied to every turn.

    Example:
        >>> session = Session(executor, ConversationThread("1"), CallContext.for_user("1"))
        >>> result = await session.invoke("What's the weather where I am?")
        >>> len(session.history())
    """

    executor: TurnExecutor[OutputT]
    thread: ConversationThread
    context: CallContext

    @classmethod
    def create(
        cls,
        executor: TurnExecutor[OutputT],
        thread_id: str,
        **identity: str,
    ) -> Session[OutputT]:
        """Build a session from a thread id and identity fields."""
        return cls(executor, ConversationThread(thread_id), CallContext(identity=identity))

    async def invoke(
        self,
        prompt: str,
        *,
        timeout: float | None = None,
        required_tools: Sequence[str] = (),
    ) -> TurnResult[OutputT]:
        """Run one turn on this session's thread."""
        return await self.executor.invoke(
            prompt,
            self.thread,
            self.context,
            timeout=timeout,
            required_tools=required_tools,
        )

    def invoke_sync(
        self,
        prompt: str,
        *,
        timeout: float | None = None,
        required_tools: Sequence[str] = (),
    ) -> TurnResult[OutputT]:
        """Run :meth:`invoke` synchronously."""
        return asyncio.run(self.invoke(prompt, timeout=timeout, required_tools=required_tools))

    def history(self) -> list[ModelMessage]:
        """Return the thread's stored messages."""
        return self.executor.get_history(self.thread)

    @property
    def usage(self) -> TokenUsage:
        """Token usage of this session's thread."""
        return self.executor.get_thread_usage(self.thread)

    def reset(self) -> None:
        """Forget the thread's history so the next turn starts fresh."""
        self.executor.store.clear(self.thread.thread_id)
