"""Protocols for the collaborators the session loop and resolver talk to.

Concrete implementations live elsewhere (``github_assistant.cli.console`` for
the terminal, the Arcade client's ``auth`` resource for authorization waits);
tests provide in-memory fakes.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Console(Protocol):
    """Interactive terminal channel."""

    async def read_line(self, prompt: str) -> str:
        """Read one line of input. Raises ``EOFError`` when input is exhausted."""
        ...

    def assistant(self, text: str) -> None: ...

    def notice(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...

    def welcome(self, text: str) -> None: ...

    def farewell(self, text: str) -> None: ...


@runtime_checkable
class AuthorizationWaiter(Protocol):
    """Blocks until an Arcade authorization flow completes.

    ``arcadepy.AsyncArcade().auth`` satisfies this protocol.
    """

    async def wait_for_completion(self, auth_response_or_id: Any) -> Any: ...
