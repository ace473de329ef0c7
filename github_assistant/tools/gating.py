"""Gated execution of Arcade tools inside the agent graph.

Every Arcade tool handed to the agent is wrapped so that, before anything is
executed remotely:

1. a mutating tool pauses the graph for explicit user approval;
2. a tool with an authorization requirement asks Arcade whether the user has
   authorized it and, if not, pauses the graph with the authorization URL.

Pauses use LangGraph's ``interrupt()``. On resume the tool body runs again from
the top and each ``interrupt()`` call returns the resume value stored for its
position, so the approval interrupt must stay ahead of the authorization one.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping

from arcadepy import APIError, AsyncArcade
from langchain_core.tools import StructuredTool
from langgraph.types import interrupt

from ..agent_core.interrupts import APPROVAL_REQUIRED_KEY, AUTHORIZATION_REQUIRED_KEY
from ..core.errors import ToolExecutionError
from .models import ToolDescriptor

logger = logging.getLogger(__name__)


def _is_authorized(resume_value: Any) -> bool:
    if isinstance(resume_value, Mapping):
        return bool(resume_value.get("authorized"))
    return resume_value is True


class GatedToolExecutor:
    """Run Arcade tools for one user, pausing for approval and authorization."""

    def __init__(self, client: AsyncArcade, user_id: str) -> None:
        self._client = client
        self._user_id = user_id

    async def run(self, descriptor: ToolDescriptor, arguments: Mapping[str, Any]) -> str:
        """Execute ``descriptor`` with ``arguments`` and return text for the model.

        Remote failures are reported back as text rather than raised so the
        model can react to them.
        """
        tool_input = {k: v for k, v in arguments.items() if v is not None}

        if descriptor.requires_approval:
            answer = interrupt(
                {APPROVAL_REQUIRED_KEY: True, "tool_name": descriptor.name, "input": tool_input}
            )
            if not _is_authorized(answer):
                logger.info(f"User declined tool call {descriptor.name}")
                return f"The user declined the {descriptor.name} tool call. It was not executed."

        try:
            if descriptor.requires_authorization and not await self._ensure_authorized(descriptor):
                logger.info(f"Authorization not granted for {descriptor.name}")
                return f"Authorization for {descriptor.name} was not granted. The tool was not executed."
            return await self._execute(descriptor, tool_input)
        except ToolExecutionError as exc:
            logger.warning(str(exc))
            return f"Error: {exc}"

    async def _ensure_authorized(self, descriptor: ToolDescriptor) -> bool:
        try:
            auth = await self._client.tools.authorize(tool_name=descriptor.qualified_name, user_id=self._user_id)
        except APIError as exc:
            raise ToolExecutionError(descriptor.name, f"authorization request failed: {exc}") from exc

        status = getattr(auth, "status", None)
        if status == "completed":
            return True
        answer = interrupt(
            {
                AUTHORIZATION_REQUIRED_KEY: True,
                "tool_name": descriptor.name,
                "authorization_response": {
                    "id": getattr(auth, "id", None),
                    "url": getattr(auth, "url", None),
                    "status": status,
                },
            }
        )
        return _is_authorized(answer)

    async def _execute(self, descriptor: ToolDescriptor, tool_input: Dict[str, Any]) -> str:
        try:
            response = await self._client.tools.execute(
                tool_name=descriptor.qualified_name,
                input=tool_input,
                user_id=self._user_id,
            )
        except APIError as exc:
            raise ToolExecutionError(descriptor.name, str(exc)) from exc

        output = getattr(response, "output", None)
        error = getattr(output, "error", None)
        if error is not None or getattr(response, "success", True) is False:
            raise ToolExecutionError(descriptor.name, str(getattr(error, "message", None) or "unknown error"))

        value = getattr(output, "value", None)
        logger.debug(f"Executed {descriptor.qualified_name}")
        if isinstance(value, str):
            return value
        return json.dumps(value, default=str)


def build_langchain_tool(descriptor: ToolDescriptor, executor: GatedToolExecutor) -> StructuredTool:
    """Wrap a descriptor as a LangChain tool executed through ``executor``."""

    async def _run(**kwargs: Any) -> str:
        return await executor.run(descriptor, kwargs)

    return StructuredTool.from_function(
        coroutine=_run,
        name=descriptor.name,
        description=descriptor.description,
        args_schema=descriptor.args_schema,
    )
