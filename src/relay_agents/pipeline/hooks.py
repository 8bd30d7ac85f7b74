"""Pipeline lifecycle hooks."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from relay_agents.agent.result import TurnResult
    from relay_agents.pipeline.sequencer import PipelineResult, PipelineStep


@dataclass
class PipelineHooks:
    """Optional callbacks fired while a pipeline runs.

    Every hook is synchronous and may be left as ``None``. An exception
    raised by a hook propagates like any other pipeline failure.

    Attributes:
        on_pipeline_start: ``(steps)`` before the first turn.
        on_pipeline_complete: ``(result)`` after the last field is extracted.
        on_pipeline_error: ``(step, error)`` when a step fails.
        on_step_start: ``(step, prompt)`` after the prompt is rendered.
        on_step_complete: ``(step, turn)`` after the field is extracted.
    """

    on_pipeline_start: Callable[[list[PipelineStep]], Any] | None = None
    on_pipeline_complete: Callable[[PipelineResult], Any] | None = None
    on_pipeline_error: Callable[[PipelineStep, Exception], Any] | None = None
    on_step_start: Callable[[PipelineStep, str], Any] | None = None
    on_step_complete: Callable[[PipelineStep, TurnResult[Any]], Any] | None = None

    def trigger(self, hook_name: str, *args: Any) -> None:
        """Call the named hook if it is set."""
        hook = getattr(self, hook_name)
        if hook is not None:
            hook(*args)
