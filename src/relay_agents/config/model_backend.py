"""Model backend settings and model construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, SecretStr

if TYPE_CHECKING:
    from pydantic_ai.models import Model


class ModelBackendSettings(BaseModel):
    """Connection settings for the hosted model.

    Attributes:
        model: pydantic-ai model identifier (``provider:model``), or a bare
            model name when ``base_url`` points at an OpenAI-compatible server.
        temperature: Sampling temperature.
        base_url: Optional OpenAI-compatible endpoint.
        api_key: Optional API key for ``base_url``.
        timeout: Per-turn deadline in seconds.
    """

    model: str = Field(
        default="google-gla:gemini-2.5-flash",
        description="Model identifier",
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="Sampling temperature",
    )
    base_url: str | None = Field(
        default=None,
        description="OpenAI-compatible base URL (optional)",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="API key for base_url",
    )
    timeout: float | None = Field(
        default=60.0,
        gt=0,
        description="Per-turn deadline in seconds (None disables it)",
    )


def build_model(backend: ModelBackendSettings) -> Model | str:
    """Resolve the model to hand to pydantic-ai.

    With ``base_url`` set, an ``OpenAIChatModel`` bound to that endpoint is
    built; otherwise the identifier is returned for pydantic-ai to infer.

    Args:
        backend: Backend settings.

    Returns:
        A ``Model`` instance or a model identifier string.
    """
    if backend.base_url is None:
        return backend.model

    from pydantic_ai.models.openai import OpenAIChatModel
    from pydantic_ai.providers.openai import OpenAIProvider

    return OpenAIChatModel(
        backend.model,
        provider=OpenAIProvider(
            base_url=backend.base_url,
            api_key=backend.api_key.get_secret_value() if backend.api_key else None,
        ),
    )
