"""Command-line entry point for the GitHub assistant.

Startup order matters: settings are validated before anything talks to the
network, so a missing ``ARCADE_USER_ID`` or ``OPENAI_MODEL`` aborts before the
Arcade client, the tool provisioner or the agent runtime exist.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

import click
from arcadepy import ArcadeError, AsyncArcade

from ..agent_core.base import Console
from ..agent_core.resolver import InterruptResolver
from ..agent_core.runtime import AgentRuntime
from ..agent_core.session import FAREWELL_MESSAGE, SessionLoop
from ..core.config import AgentConfig, Settings, load_settings
from ..core.errors import ConfigurationError, GitHubAssistantError
from ..core.logging_config import setup_logging
from ..tools.provisioner import ToolProvisioner
from .console import TerminalConsole

logger = logging.getLogger(__name__)


def build_arcade_client(settings: Settings) -> AsyncArcade:
    try:
        return AsyncArcade(api_key=settings.arcade_api_key, base_url=settings.arcade_base_url)
    except ArcadeError as exc:
        raise ConfigurationError(f"Missing ARCADE_API_KEY. Add it to your .env file. ({exc})") from exc


def build_runtime(config: AgentConfig, settings: Settings, tools: Mapping[str, Any]) -> AgentRuntime:
    model_kwargs = {"api_key": settings.openai_api_key} if settings.openai_api_key else {}
    try:
        return AgentRuntime.create(config, list(tools.values()), model_kwargs=model_kwargs)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid OPENAI_MODEL {config.model!r}: {exc}") from exc


async def run_session(
    config: AgentConfig,
    settings: Settings,
    *,
    console: Optional[Console] = None,
    client: Optional[AsyncArcade] = None,
) -> None:
    """Provision tools, build the agent and run the interactive session."""
    console = console if console is not None else TerminalConsole()
    client = client if client is not None else build_arcade_client(settings)
    try:
        tools = await ToolProvisioner(client).get_tools(
            user_id=config.user_id,
            toolkits=config.toolkits,
            tools=config.tools,
            limit=config.tool_limit,
        )
        runtime = build_runtime(config, settings, tools)
        resolver = InterruptResolver(
            console=console,
            authorizer=client.auth,
            authorization_timeout=config.authorization_timeout,
        )
        await SessionLoop(runtime=runtime, resolver=resolver, console=console).run()
    finally:
        await client.close()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--env-file",
    default=".env",
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Dotenv file holding ARCADE_USER_ID, OPENAI_MODEL and API keys.",
)
@click.option("--log-level", default=None, help="Console log level (overrides GITHUB_ASSISTANT_LOG_LEVEL).")
@click.option(
    "--log-format",
    type=click.Choice(["simple", "detailed", "json"]),
    default=None,
    help="Log record format.",
)
@click.option("--no-log-file", is_flag=True, default=False, help="Disable the DEBUG log file under logs/.")
def main(env_file: str, log_level: Optional[str], log_format: Optional[str], no_log_file: bool) -> None:
    """Chat with a GitHub assistant backed by Arcade tools. Type 'exit' to quit."""
    try:
        settings = load_settings(env_file=env_file)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc

    setup_logging(log_level=log_level or settings.log_level, log_format=log_format, enable_file=not no_log_file)
    config = AgentConfig.from_settings(settings)
    logger.info(f"Starting session: model={config.model}, toolkits={list(config.toolkits)}")

    try:
        asyncio.run(run_session(config, settings))
    except KeyboardInterrupt:
        # Ctrl-C cancels the session task; end the session like `exit`
        logger.info("Session interrupted")
        TerminalConsole().farewell(FAREWELL_MESSAGE)
    except GitHubAssistantError as exc:
        logger.error(f"Startup failed: {exc}")
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    main()
