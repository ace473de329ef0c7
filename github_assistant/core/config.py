"""
Configuration Settings.

This module defines the application configuration using Pydantic's BaseSettings.
It loads configuration from environment variables and a .env file.

Two layers are exposed:

- ``Settings``: everything read from the process environment (credentials,
  model identifier, logging and timeout knobs).
- ``AgentConfig``: the single immutable configuration value handed to the tool
  provisioner, the agent runtime and the interrupt resolver. It combines the
  environment-derived settings with the compiled-in agent constants.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..prompts import GITHUB_SYSTEM_PROMPT
from .errors import ConfigurationError

# =====================================================================
# Compiled-in agent constants
# =====================================================================

# Arcade toolkits whose tools are all loaded into the agent.
DEFAULT_TOOLKITS: tuple[str, ...] = ("Github",)
# Individually named tools loaded in addition to the toolkits.
DEFAULT_TOOLS: tuple[str, ...] = ()
# Maximum number of tool definitions requested from Arcade.
DEFAULT_TOOL_LIMIT = 100
# Single conversation thread per process run.
DEFAULT_THREAD_ID = "1"


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are bound from environment variables and the .env file.
    ``ARCADE_USER_ID`` and ``OPENAI_MODEL`` are required; use ``load_settings``
    to get a descriptive ``ConfigurationError`` when either is missing.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        env_ignore_empty=True,
    )

    # =====================================================================
    # Required configuration
    # =====================================================================
    arcade_user_id: str = Field(
        min_length=1,
        alias="ARCADE_USER_ID",
        description="Arcade user identity that authorizes each remote service",
    )
    model: str = Field(
        min_length=1,
        alias="OPENAI_MODEL",
        description="Chat model identifier used by the agent (e.g. gpt-4o or openai:gpt-4o)",
    )

    # =====================================================================
    # Optional credentials
    # =====================================================================
    arcade_api_key: Optional[str] = Field(
        default=None,
        alias="ARCADE_API_KEY",
        description="Arcade API key (falls back to the Arcade client's own environment lookup)",
    )
    arcade_base_url: Optional[str] = Field(
        default=None,
        alias="ARCADE_BASE_URL",
        description="Custom Arcade Engine base URL (optional)",
    )
    openai_api_key: Optional[str] = Field(
        default=None,
        alias="OPENAI_API_KEY",
        description="API key forwarded to the chat model (optional)",
    )

    # =====================================================================
    # Runtime behaviour
    # =====================================================================
    log_level: str = Field(
        default="WARNING",
        alias="GITHUB_ASSISTANT_LOG_LEVEL",
        description="Console logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    authorization_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        alias="GITHUB_ASSISTANT_AUTHORIZATION_TIMEOUT",
        description="Seconds to wait for a browser authorization before denying it; unset waits indefinitely",
    )


_MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short"})


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    """
    Load ``Settings`` and translate validation failures into ``ConfigurationError``.

    Args:
        env_file: Path of the dotenv file to read, or ``None`` to only use the
            process environment.

    Returns:
        The validated settings.

    Raises:
        ConfigurationError: If a required value is missing or a value is invalid.
    """
    try:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    except ValidationError as exc:
        raise ConfigurationError(_describe_validation_error(exc)) from exc


def _describe_validation_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for err in exc.errors():
        name = str(err["loc"][0]) if err.get("loc") else "configuration"
        if err["type"] in _MISSING_ERROR_TYPES:
            messages.append(f"Missing {name}. Add it to your .env file.")
        else:
            messages.append(f"Invalid value for {name}: {err['msg']}")
    return " ".join(messages)


# =====================================================================
# Agent configuration value
# =====================================================================


class AgentConfig(BaseModel):
    """Immutable configuration for one assistant session.

    Constructed once at startup (see ``from_settings``) and passed down to the
    tool provisioner, the agent runtime and the interrupt resolver.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(description="Arcade user identity")
    model: str = Field(description="Chat model identifier")
    toolkits: tuple[str, ...] = Field(default=DEFAULT_TOOLKITS, description="Arcade toolkits to load")
    tools: tuple[str, ...] = Field(default=DEFAULT_TOOLS, description="Individually named Arcade tools to load")
    tool_limit: int = Field(default=DEFAULT_TOOL_LIMIT, gt=0, description="Maximum number of tool definitions")
    system_prompt: str = Field(default=GITHUB_SYSTEM_PROMPT, description="Static system prompt")
    thread_id: str = Field(default=DEFAULT_THREAD_ID, description="Conversation thread identifier")
    authorization_timeout: Optional[float] = Field(
        default=None, description="Bounded authorization wait in seconds, or None for no limit"
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AgentConfig":
        """Build the agent configuration from loaded settings and the compiled-in constants."""
        return cls(
            user_id=settings.arcade_user_id,
            model=settings.model,
            authorization_timeout=settings.authorization_timeout,
        )

    @property
    def runnable_config(self) -> dict:
        """LangGraph run configuration addressing this session's conversation thread."""
        return {"configurable": {"thread_id": self.thread_id}}
