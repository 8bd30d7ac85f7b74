"""Configuration system for relay-agents.

Main exports:
- RelaySettings: Root configuration class
- ModelBackendSettings: Model backend connection settings
- LoggingConfig: Logging configuration
- build_model: Resolve backend settings into a pydantic-ai model
"""

from relay_agents.config.logging_config import LoggingConfig
from relay_agents.config.model_backend import ModelBackendSettings, build_model
from relay_agents.config.settings import RelaySettings

__all__ = [
    "LoggingConfig",
    "ModelBackendSettings",
    "RelaySettings",
    "build_model",
]
