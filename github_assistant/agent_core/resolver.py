"""Interrupt resolution.

``InterruptResolver`` turns one pause event into one ``Decision`` by driving
the matching user interaction on the console:

- authorization: show the URL and wait for Arcade to report the flow complete;
- approval: show the proposed tool input and ask a yes/no question;
- anything else: deny.

The resolver never raises for a failed authorization wait; the failure is
logged and mapped to a denial so the agent can decide how to continue.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

from .base import AuthorizationWaiter, Console
from .interrupts import (
    DENIED,
    GRANTED,
    ApprovalPause,
    AuthorizationPause,
    Decision,
    PauseEvent,
)

logger = logging.getLogger(__name__)

APPROVAL_QUESTION = "Do you approve this tool call? (yes/no) "


def is_affirmative(answer: str) -> bool:
    """Only an explicit ``yes`` approves."""
    return answer.strip().lower() == "yes"


class InterruptResolver:
    """Resolve pause events emitted by the agent runtime."""

    def __init__(
        self,
        *,
        console: Console,
        authorizer: AuthorizationWaiter,
        authorization_timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            console: Terminal channel used for prompts and notices.
            authorizer: Waits for browser authorizations (the Arcade ``auth`` resource).
            authorization_timeout: Seconds before an unfinished authorization is
                treated as denied. ``None`` waits indefinitely.
        """
        self._console = console
        self._authorizer = authorizer
        self._authorization_timeout = authorization_timeout

    async def resolve(self, event: PauseEvent) -> Decision:
        """Drive the user interaction for ``event`` and return the decision."""
        if isinstance(event, AuthorizationPause):
            return await self._resolve_authorization(event)
        if isinstance(event, ApprovalPause):
            return await self._resolve_approval(event)
        logger.warning(f"Denying unrecognized pause event: {event!r}")
        return DENIED

    async def _resolve_authorization(self, event: AuthorizationPause) -> Decision:
        self._console.notice(f"Authorization required for tool call {event.tool_name}")
        self._console.notice(f"Please authorize in your browser {event.url}")
        self._console.notice("Waiting for you to complete authorization...")
        try:
            waiting = self._authorizer.wait_for_completion(event.authorization_id)
            if self._authorization_timeout is not None:
                response = await asyncio.wait_for(waiting, timeout=self._authorization_timeout)
            else:
                response = await waiting
        except Exception as exc:
            logger.exception(f"Authorization wait failed for tool '{event.tool_name}'")
            self._console.error(f"Error waiting for authorization to complete: {exc!r}")
            return DENIED

        status = getattr(response, "status", None)
        if status is not None and status != "completed":
            logger.warning(f"Authorization for tool '{event.tool_name}' finished with status={status}")
            self._console.error(f"Authorization was not completed (status: {status}).")
            return DENIED

        logger.debug(f"Authorization {event.authorization_id} completed for tool '{event.tool_name}'")
        self._console.notice("Authorization granted. Resuming execution...")
        return GRANTED

    async def _resolve_approval(self, event: ApprovalPause) -> Decision:
        self._console.notice(f"Human in the loop required for tool call {event.tool_name}")
        self._console.notice(
            "Please approve the tool call " + json.dumps(dict(event.tool_input), indent=2, default=str)
        )
        try:
            answer = await self._console.read_line(APPROVAL_QUESTION)
        except EOFError:
            logger.info(f"Input closed while approving tool '{event.tool_name}'; denying")
            return DENIED
        approved = is_affirmative(answer)
        logger.debug(f"Tool '{event.tool_name}' approval answer={answer!r} approved={approved}")
        return Decision(authorized=approved)
