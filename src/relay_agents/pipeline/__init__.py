"""Sequential multi-turn pipelines.

A pipeline runs a fixed list of steps on one session. Each step renders a
prompt from the field extracted by the step before it, runs one turn and
extracts its own field.

Example:
    >>> from relay_agents.pipeline import Pipeline, PipelineStep
    >>> pipeline = Pipeline([
    ...     PipelineStep("weather", "What's the weather where I am?", "weather_summary"),
    ...     PipelineStep("sport", "Weather: {{ previous }}. Reply with sport only.", "sport"),
    ... ])
    >>> result = pipeline.run_sync(session)
    >>> result.fields
"""

from relay_agents.pipeline.errors import PromptError, TemplateRenderError
from relay_agents.pipeline.hooks import PipelineHooks
from relay_agents.pipeline.sequencer import Pipeline, PipelineResult, PipelineStep
from relay_agents.pipeline.template import PromptTemplate

__all__ = [
    "Pipeline",
    "PipelineHooks",
    "PipelineResult",
    "PipelineStep",
    "PromptError",
    "PromptTemplate",
    "TemplateRenderError",
]
