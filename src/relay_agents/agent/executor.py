"""Turn executor: one request/response exchange on a conversation thread."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic_ai import Agent as PydanticAgent
from pydantic_ai.exceptions import ModelAPIError, ModelHTTPError, UnexpectedModelBehavior
from pydantic_ai.settings import ModelSettings

from relay_agents.agent.config import AgentConfig
from relay_agents.agent.result import TurnResult, extract_tool_calls
from relay_agents.config.model_backend import build_model
from relay_agents.config.settings import RelaySettings
from relay_agents.errors import (
    MissingToolCallError,
    ModelBackendError,
    RateLimitError,
    StructuredOutputError,
    ToolRetriesExceededError,
    TurnTimeoutError,
)
from relay_agents.threads.store import ConversationThread, InMemoryThreadStore, ThreadStore
from relay_agents.tokens.tracker import TokenUsage, UsageTracker
from relay_agents.tools.context import CallContext

if TYPE_CHECKING:
    from pydantic_ai import AgentRunResult
    from pydantic_ai.messages import ModelMessage
    from pydantic_ai.models import Model

    from relay_agents.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

# Message pydantic-ai uses when a tool has used up its retries
_TOOL_RETRIES_RE = re.compile(r"Tool '(?P<tool>[^']+)' exceeded max retries")


OutputT = TypeVar("OutputT")


class TurnExecutor(Generic[OutputT]):
    """Runs single turns against the model, scoped to a thread and a call context.

    A thin wrapper around a pydantic-ai ``Agent`` that adds:
    - Thread history read from and appended to a :class:`ThreadStore`
    - One in-flight turn per thread
    - A per-turn deadline
    - Mapping of backend and output failures onto :mod:`relay_agents.errors`
    - Token usage tracking

    Example:
        >>> executor = TurnExecutor(
        ...     "google-gla:gemini-2.5-flash",
        ...     registry=build_weather_registry(),
        ...     output_type=WeatherReport,
        ...     config=AgentConfig(system_prompt=SYSTEM_PROMPT),
        ... )
        >>> result = await executor.invoke(
        ...     "What's the weather where I am?",
        ...     ConversationThread("1"),
        ...     CallContext.for_user("1"),
        ... )
        >>> result.get("weather_summary")
    """

    def __init__(
        self,
        model: str | Model | None = None,
        *,
        registry: ToolRegistry,
        output_type: type[OutputT],
        store: ThreadStore | None = None,
        config: AgentConfig | None = None,
        settings: RelaySettings | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            model: Model to use (identifier or ``Model`` instance). If not
                provided, it is built from ``settings.model_backend``.
            registry: Tools the model may call.
            output_type: Structured result schema for every turn.
            store: Thread store. Defaults to a fresh in-memory store.
            config: Turn execution configuration.
            settings: Full settings (model backend, temperature, timeout).
        """
        self._config = config or AgentConfig()
        self._settings = settings or RelaySettings()
        self._registry = registry
        self._output_type = output_type
        self._store = store if store is not None else InMemoryThreadStore()

        if model is None:
            model = build_model(self._settings.model_backend)
        self._model_name = model if isinstance(model, str) else getattr(model, "model_name", None)

        self._agent: PydanticAgent[CallContext, OutputT] = PydanticAgent(
            model,
            deps_type=CallContext,
            output_type=output_type,
            system_prompt=self._config.system_prompt or (),
            toolsets=[registry.to_toolset(graceful_errors=self._config.graceful_tool_errors)],
            model_settings=ModelSettings(temperature=self._settings.model_backend.temperature),
            output_retries=self._config.output_retries,
        )

        self._usage_tracker = UsageTracker()

    @property
    def registry(self) -> ToolRegistry:
        """Tools available to the model."""
        return self._registry

    @property
    def store(self) -> ThreadStore:
        """Thread store holding conversation history."""
        return self._store

    @property
    def output_type(self) -> type[OutputT]:
        """Structured result schema."""
        return self._output_type

    @property
    def agent(self) -> PydanticAgent[CallContext, OutputT]:
        """The underlying pydantic-ai agent."""
        return self._agent

    def _resolve_timeout(self, timeout: float | None) -> float | None:
        if timeout is not None:
            return timeout
        if self._config.turn_timeout_seconds is not None:
            return self._config.turn_timeout_seconds
        return self._settings.model_backend.timeout

    async def invoke(
        self,
        prompt: str,
        thread: ConversationThread | str,
        context: CallContext,
        *,
        timeout: float | None = None,
        required_tools: Sequence[str] = (),
    ) -> TurnResult[OutputT]:
        """Send one user message on a thread and return the structured result.

        The thread's history is extended with the user message, any tool
        traces and the final reply only when the turn succeeds. Time spent
        waiting for another turn on the same thread counts against the deadline.

        Args:
            prompt: User message text.
            thread: Thread (or thread id) the turn belongs to.
            context: Caller identity, passed to context-aware tools.
            timeout: Deadline in seconds, overriding config and settings.
            required_tools: Tools that must be called during the turn.

        Returns:
            The turn result.

        Raises:
            RateLimitError: If the backend rejected the request with HTTP 429.
            ModelBackendError: For any other backend HTTP error, or an unreachable
                backend (retryable).
            StructuredOutputError: If the reply could not be coerced to the schema.
            ToolRetriesExceededError: If a tool kept failing until its retries ran out.
            TurnTimeoutError: If the turn exceeded its deadline.
            MissingToolCallError: If a required tool was not called.
        """
        thread_id = thread.thread_id if isinstance(thread, ConversationThread) else thread
        deadline = self._resolve_timeout(timeout)

        try:
            # Waiting for the thread lock counts against the deadline
            async with asyncio.timeout(deadline), self._store.lock(thread_id):
                history = self._store.read(thread_id)
                logger.info(
                    "Running turn on thread %s (%d prior messages)", thread_id, len(history)
                )
                run_result = await self._agent.run(
                    prompt,
                    message_history=history or None,
                    deps=context,
                )
                return self._complete_turn(run_result, prompt, thread_id, required_tools)
        except TimeoutError as exc:
            logger.warning("Turn on thread %s timed out after %ss", thread_id, deadline)
            raise TurnTimeoutError(
                f"Turn exceeded deadline of {deadline}s",
                cause=exc,
                timeout_seconds=deadline,
                thread_id=thread_id,
            ) from exc
        except ModelHTTPError as exc:
            logger.warning(
                "Model backend returned HTTP %s on thread %s", exc.status_code, thread_id
            )
            error_cls = RateLimitError if exc.status_code == 429 else ModelBackendError
            raise error_cls(
                f"Model backend error (HTTP {exc.status_code})",
                cause=exc,
                model=exc.model_name,
                status_code=exc.status_code,
                response_body=exc.body,
            ) from exc
        except ModelAPIError as exc:
            logger.warning("Model backend unreachable on thread %s: %s", thread_id, exc)
            raise ModelBackendError(
                "Model backend unreachable",
                cause=exc,
                model=exc.model_name,
                retryable=True,
            ) from exc
        except UnexpectedModelBehavior as exc:
            match = _TOOL_RETRIES_RE.match(exc.message)
            if match and match["tool"] in self._registry:
                logger.warning(
                    "Tool %s kept failing on thread %s: %s", match["tool"], thread_id, exc
                )
                raise ToolRetriesExceededError(
                    f"Tool '{match['tool']}' kept failing after its retries were used up",
                    cause=exc,
                    tool_name=match["tool"],
                    thread_id=thread_id,
                ) from exc
            logger.warning("Unusable model output on thread %s: %s", thread_id, exc)
            raise StructuredOutputError(
                "Model output could not be coerced to the structured result schema",
                cause=exc,
                thread_id=thread_id,
                output_type=getattr(self._output_type, "__name__", str(self._output_type)),
            ) from exc

    def _complete_turn(
        self,
        run_result: AgentRunResult[OutputT],
        prompt: str,
        thread_id: str,
        required_tools: Sequence[str],
    ) -> TurnResult[OutputT]:
        new_messages = run_result.new_messages()
        tool_calls = extract_tool_calls(new_messages, self._registry.names())
        for trace in tool_calls:
            logger.debug("Tool %s(%s) -> %r", trace.tool_name, trace.args, trace.result)

        called = {trace.tool_name for trace in tool_calls}
        missing = [name for name in required_tools if name not in called]
        if missing:
            logger.warning("Turn on thread %s skipped required tools %s", thread_id, missing)
            raise MissingToolCallError(
                f"Required tools not called: {', '.join(missing)}",
                missing=missing,
                called=sorted(called),
                thread_id=thread_id,
            )

        self._store.append(thread_id, new_messages)
        usage = self._usage_tracker.record_usage(
            run_result.usage(), model=self._model_name, thread_id=thread_id
        )
        logger.info(
            "Turn on thread %s complete: %d tool calls, %d tokens",
            thread_id,
            len(tool_calls),
            usage.total_tokens,
        )

        return TurnResult(
            output=run_result.output,
            thread_id=thread_id,
            prompt=prompt,
            tool_calls=tool_calls,
            new_messages=new_messages,
            usage=usage,
        )

    def invoke_sync(
        self,
        prompt: str,
        thread: ConversationThread | str,
        context: CallContext,
        *,
        timeout: float | None = None,
        required_tools: Sequence[str] = (),
    ) -> TurnResult[OutputT]:
        """Run :meth:`invoke` synchronously (not from inside a running loop)."""
        return asyncio.run(
            self.invoke(prompt, thread, context, timeout=timeout, required_tools=required_tools)
        )

    def get_history(self, thread: ConversationThread | str) -> list[ModelMessage]:
        """Return the stored messages for a thread."""
        thread_id = thread.thread_id if isinstance(thread, ConversationThread) else thread
        return self._store.read(thread_id)

    def get_usage(self) -> TokenUsage:
        """Aggregate token usage over all turns run by this executor."""
        return self._usage_tracker.get_total_usage()

    def get_thread_usage(self, thread: ConversationThread | str) -> TokenUsage:
        """Aggregate token usage for one thread."""
        thread_id = thread.thread_id if isinstance(thread, ConversationThread) else thread
        return self._usage_tracker.get_thread_usage(thread_id)
