"""Cross-cutting infrastructure: configuration, logging and error types."""

from .config import AgentConfig, Settings, load_settings
from .errors import (
    ConfigurationError,
    GitHubAssistantError,
    ToolExecutionError,
    ToolProvisioningError,
)

__all__ = [
    "AgentConfig",
    "Settings",
    "load_settings",
    "ConfigurationError",
    "GitHubAssistantError",
    "ToolExecutionError",
    "ToolProvisioningError",
]
