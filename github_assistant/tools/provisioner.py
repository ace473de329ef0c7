"""Tool provisioning from Arcade.

``ToolProvisioner`` collects tool definitions for the configured toolkits and
individually named tools, and turns them into LangChain tools bound to one
Arcade user.

Typical usage:
    client = AsyncArcade(api_key=...)
    provisioner = ToolProvisioner(client)
    tools = await provisioner.get_tools(
        user_id="me@example.com", toolkits=["Github"], tools=[], limit=100
    )
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from arcadepy import APIError, AsyncArcade
from langchain_core.tools import StructuredTool

from ..core.errors import ToolProvisioningError
from .gating import GatedToolExecutor, build_langchain_tool
from .models import ToolDescriptor, qualified_name_of

logger = logging.getLogger(__name__)


class ToolProvisioner:
    """Retrieve Arcade tool definitions and expose them as agent tools."""

    def __init__(self, client: AsyncArcade) -> None:
        self._client = client

    async def fetch_descriptors(
        self,
        *,
        toolkits: Iterable[str],
        tools: Iterable[str] = (),
        limit: int = 100,
    ) -> Dict[str, ToolDescriptor]:
        """
        Fetch tool definitions and convert them into descriptors.

        Toolkit tools are collected first, then individually named tools.
        Duplicates are dropped and at most ``limit`` descriptors are returned.

        Args:
            toolkits: Arcade toolkit names (e.g. ``"Github"``).
            tools: Individually named Arcade tools (e.g. ``"Slack.SendMessage"``).
            limit: Maximum number of tool definitions.

        Returns:
            Mapping of model-facing tool name to descriptor, in retrieval order.

        Raises:
            ToolProvisioningError: If Arcade fails or no definition is found.
        """
        toolkits = list(toolkits)
        tools = list(tools)
        definitions: Dict[str, Any] = {}
        try:
            for toolkit in toolkits:
                async for definition in self._client.tools.list(toolkit=toolkit, limit=limit):
                    if len(definitions) >= limit:
                        break
                    definitions.setdefault(qualified_name_of(definition), definition)
            for name in tools:
                if len(definitions) >= limit:
                    logger.warning(f"Tool limit {limit} reached; skipping {name}")
                    continue
                definition = await self._client.tools.get(name=name)
                definitions.setdefault(qualified_name_of(definition), definition)
        except APIError as exc:
            raise ToolProvisioningError(str(exc)) from exc

        if not definitions:
            raise ToolProvisioningError(f"no tools found for toolkits={toolkits} tools={tools}")

        descriptors: Dict[str, ToolDescriptor] = {}
        for definition in definitions.values():
            descriptor = ToolDescriptor.from_definition(definition)
            descriptors[descriptor.name] = descriptor
        logger.info(f"Loaded {len(descriptors)} tool definitions from Arcade")
        return descriptors

    async def get_tools(
        self,
        *,
        user_id: str,
        toolkits: Iterable[str],
        tools: Iterable[str] = (),
        limit: int = 100,
    ) -> Dict[str, StructuredTool]:
        """Return invocable LangChain tools keyed by tool name, bound to ``user_id``."""
        descriptors = await self.fetch_descriptors(toolkits=toolkits, tools=tools, limit=limit)
        executor = GatedToolExecutor(self._client, user_id)
        return {name: build_langchain_tool(descriptor, executor) for name, descriptor in descriptors.items()}
