"""Sequential pipeline threading one structured field into the next prompt."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from relay_agents.errors import ConfigurationError
from relay_agents.pipeline.hooks import PipelineHooks
from relay_agents.pipeline.template import PromptTemplate

if TYPE_CHECKING:
    from relay_agents.agent.result import TurnResult
    from relay_agents.agent.session import Session

logger = logging.getLogger(__name__)

PromptFn = Callable[..., str]


@dataclass(frozen=True)
class PipelineStep:
    """One turn in a pipeline.

    ``template`` is either a :class:`PromptTemplate` (a plain string is
    compiled into one) or a function. Templates are rendered with
    ``previous`` bound to the prior step's field and every earlier field
    under its own name. Functions are called as ``fn()`` for the first step
    and ``fn(previous)`` afterwards.

    Attributes:
        name: Unique step name.
        template: Prompt template or prompt function.
        output_field: Structured field extracted from this step's result.
        required_tools: Tools the model must call during this step.
        timeout: Optional per-step deadline in seconds.
    """

    name: str
    template: PromptTemplate | PromptFn
    output_field: str
    required_tools: tuple[str, ...] = ()
    timeout: float | None = None

    def __post_init__(self) -> None:
        if isinstance(self.template, str):
            object.__setattr__(self, "template", PromptTemplate(self.name, self.template))
        object.__setattr__(self, "required_tools", tuple(self.required_tools))

    def render(self, previous: Any | None, fields: dict[str, Any], *, first: bool) -> str:
        """Build the prompt text for this step."""
        if isinstance(self.template, PromptTemplate):
            variables = dict(fields)
            if not first:
                variables["previous"] = previous
            return self.template.render(**variables)
        if first:
            return self.template()
        return self.template(previous)


@dataclass
class PipelineResult:
    """Outcome of a full pipeline run.

    Attributes:
        fields: Extracted field values keyed by field name, in step order.
        turns: Turn results, one per step.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    turns: list[TurnResult[Any]] = field(default_factory=list)

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]

    @property
    def last(self) -> Any:
        """The field extracted by the final step."""
        return next(reversed(self.fields.values()))


class Pipeline:
    """Run steps strictly in order on one session.

    Step N+1 is rendered only after step N's turn has completed and its
    field has been extracted. A missing field stops the pipeline with
    :class:`~relay_agents.errors.MissingFieldError` before the next prompt
    exists; there are no retries and no partial results.

    Example:
        >>> pipeline = Pipeline([
        ...     PipelineStep("weather", "What's the weather where I am?", "weather_summary"),
        ...     PipelineStep("sport", "Weather: {{ previous }}. Which sport?", "sport"),
        ... ])
        >>> result = await pipeline.run(session)
        >>> result["sport"]
    """

    def __init__(
        self,
        steps: Sequence[PipelineStep],
        *,
        hooks: PipelineHooks | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            steps: Steps in execution order.
            hooks: Optional lifecycle hooks.

        Raises:
            ConfigurationError: If there are no steps or step names repeat.
        """
        if not steps:
            raise ConfigurationError("Pipeline needs at least one step", config_key="steps")
        seen: set[str] = set()
        for step in steps:
            if step.name in seen:
                raise ConfigurationError(
                    f"Duplicate pipeline step name: '{step.name}'",
                    config_key="steps",
                    actual=step.name,
                )
            seen.add(step.name)

        self._steps = list(steps)
        self._hooks = hooks or PipelineHooks()

    @property
    def steps(self) -> list[PipelineStep]:
        """Steps in execution order."""
        return list(self._steps)

    async def run(self, session: Session[Any]) -> PipelineResult:
        """Execute every step against ``session``.

        Args:
            session: Session supplying the executor, thread and call context.

        Returns:
            Extracted fields and turn results.

        Raises:
            MissingFieldError: If a step's result lacks its output field.
            RelayError: Any turn failure, unchanged.
        """
        result = PipelineResult()
        previous: Any | None = None
        self._hooks.trigger("on_pipeline_start", self.steps)

        for index, step in enumerate(self._steps):
            try:
                prompt = step.render(previous, result.fields, first=index == 0)
                self._hooks.trigger("on_step_start", step, prompt)
                logger.info("Pipeline step %d/%d: %s", index + 1, len(self._steps), step.name)

                turn = await session.invoke(
                    prompt,
                    timeout=step.timeout,
                    required_tools=step.required_tools,
                )
                previous = turn.require(step.output_field, step=step.name)
            except Exception as exc:
                logger.warning("Pipeline stopped at step %s: %s", step.name, exc)
                self._hooks.trigger("on_pipeline_error", step, exc)
                raise

            result.fields[step.output_field] = previous
            result.turns.append(turn)
            self._hooks.trigger("on_step_complete", step, turn)

        self._hooks.trigger("on_pipeline_complete", result)
        return result

    def run_sync(self, session: Session[Any]) -> PipelineResult:
        """Run :meth:`run` synchronously."""
        return asyncio.run(self.run(session))
