from __future__ import annotations

"""Interactive session loop.

``SessionLoop`` is a two-level state machine:

- Outer loop: wait for a line of input. ``exit`` (any casing) or end of input
  terminates the session; blank lines are ignored; anything else starts a turn.
- Inner loop (one turn): drain ``AgentRuntime.advance`` while printing
  assistant messages and collecting pause events. With no pauses the turn is
  over. Otherwise every pause is resolved in order and the turn is resumed
  with the bundled decisions.

A failing turn is logged and reported on the console; the loop then returns to
waiting for input and never replays the failed input.
"""

import logging
from typing import Any, Protocol

from .base import Console
from .interrupts import Decision, PauseEvent, bundle_decisions
from .resolver import InterruptResolver
from .runtime.models import MessageUpdate, TurnUpdate

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"
INPUT_PROMPT = "> "
WELCOME_MESSAGE = "Welcome to the chatbot! Type 'exit' to quit."
FAREWELL_MESSAGE = "👋 Bye..."


class TurnRuntime(Protocol):
    """The subset of ``AgentRuntime`` the loop depends on."""

    def user_message(self, text: str) -> Any: ...

    def resume_command(self, events: list[PauseEvent], bundle: Any) -> Any: ...

    def advance(self, agent_input: Any) -> Any: ...


def is_exit_command(line: str) -> bool:
    return line.strip().lower() == EXIT_COMMAND


class SessionLoop:
    """Read-eval-print loop over the agent runtime."""

    def __init__(self, *, runtime: TurnRuntime, resolver: InterruptResolver, console: Console) -> None:
        self._runtime = runtime
        self._resolver = resolver
        self._console = console

    async def run(self) -> None:
        """Run until the user exits or input is exhausted."""
        self._console.welcome(WELCOME_MESSAGE)
        while True:
            try:
                line = await self._console.read_line(INPUT_PROMPT)
            except EOFError:
                logger.info("Input closed; ending session")
                break
            if is_exit_command(line):
                break
            if not line.strip():
                continue
            await self.run_turn(line)
        self._console.farewell(FAREWELL_MESSAGE)

    async def run_turn(self, text: str) -> bool:
        """Process one user turn, resolving pauses until the turn completes.

        Returns:
            True when the turn completed, False when it failed.
        """
        agent_input: Any = self._runtime.user_message(text)
        try:
            while True:
                events = await self._drain(agent_input)
                if not events:
                    return True
                decisions: list[Decision] = []
                for event in events:
                    decisions.append(await self._resolver.resolve(event))
                agent_input = self._runtime.resume_command(events, bundle_decisions(decisions))
        except Exception as exc:
            logger.exception("Turn failed")
            self._console.error(f"Error: {exc}")
            return False

    async def _drain(self, agent_input: Any) -> list[PauseEvent]:
        events: list[PauseEvent] = []
        update: TurnUpdate
        async for update in self._runtime.advance(agent_input):
            if isinstance(update, MessageUpdate):
                self._console.assistant(update.text)
            else:
                events.append(update)
        return events
