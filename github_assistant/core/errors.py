"""Error types for the GitHub assistant.

Defines a small hierarchy of exceptions raised at startup (configuration and
tool provisioning) and while executing remote tools.
"""

from __future__ import annotations


class GitHubAssistantError(Exception):
    """Base error for all GitHub assistant exceptions."""


class ConfigurationError(GitHubAssistantError):
    """Raised when required startup configuration is missing or invalid."""


class ToolProvisioningError(GitHubAssistantError):
    """Raised when tool definitions cannot be retrieved from Arcade."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Unable to load tools from Arcade: {message}")


class ToolExecutionError(GitHubAssistantError):
    """Raised for unsuccessful remote tool executions with additional context."""

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool execution failed for '{tool_name}': {message}")
