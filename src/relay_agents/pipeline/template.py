"""Prompt templates rendered with Jinja2."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, StrictUndefined, TemplateError, meta

from relay_agents.pipeline.errors import TemplateRenderError

if TYPE_CHECKING:
    from jinja2 import Template as Jinja2Template

_ENV = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=False)


@dataclass
class PromptTemplate:
    """A renderable prompt template with ``{{ var }}`` syntax.

    Rendering is strict: an undefined variable, or a variable bound to
    ``None``, raises :class:`TemplateRenderError` instead of producing
    empty or placeholder text.

    Attributes:
        name: Template name used in error messages.
        source: Raw Jinja2 source.

    Example:
        >>> template = PromptTemplate("sport", "Weather: {{ weather }}. Reply with sport only.")
        >>> template.render(weather="sunny")
        'Weather: sunny. Reply with sport only.'
    """

    name: str
    source: str
    _compiled: Jinja2Template | None = field(default=None, repr=False, compare=False)

    def render(self, **variables: Any) -> str:
        """Render the template with the given variables.

        Raises:
            TemplateRenderError: If a variable is undefined or ``None``, or rendering fails.
        """
        try:
            empty = sorted(k for k in self.get_variables() if variables.get(k, "") is None)
            if empty:
                raise TemplateRenderError(self.name, ValueError(f"variables are None: {empty}"))
            if self._compiled is None:
                self._compiled = _ENV.from_string(self.source)
            return self._compiled.render(**variables)
        except TemplateError as e:
            raise TemplateRenderError(self.name, e) from e

    def get_variables(self) -> set[str]:
        """Return the variable names referenced by the template."""
        return meta.find_undeclared_variables(_ENV.parse(self.source))

    def __str__(self) -> str:
        return self.source
