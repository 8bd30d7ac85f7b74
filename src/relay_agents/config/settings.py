"""Root settings for relay-agents."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from relay_agents.config.logging_config import LoggingConfig
from relay_agents.config.model_backend import ModelBackendSettings


class RelaySettings(BaseSettings):
    """Root configuration.

    Sources, highest priority first: constructor arguments, ``RELAY_*``
    environment variables (nested with ``__``), a ``.env`` file, then
    ``config.toml`` in the working directory.

    Example:
        >>> # RELAY_MODEL_BACKEND__MODEL=openai:gpt-4o-mini
        >>> settings = RelaySettings()
        >>> settings.model_backend.model
        'openai:gpt-4o-mini'
    """

    model_config = SettingsConfigDict(
        env_prefix="RELAY_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        toml_file="config.toml",
        extra="ignore",
    )

    model_backend: ModelBackendSettings = Field(default_factory=ModelBackendSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    thread_id: str = Field(
        default="1",
        min_length=1,
        description="Conversation thread used by the weather scenario",
    )
    user_id: str = Field(
        default="1",
        description="Caller identity used by the weather scenario",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )
