"""Terminal console backed by click.

Assistant messages are prefixed with a robot glyph, authorization and approval
notices with a gear glyph.

Input is read from the stdin file descriptor through the event loop
(``loop.add_reader``), never from a worker thread: a Ctrl-C cancels the
session task while it waits for input and nothing is left blocked in
``read()`` when the interpreter shuts down.
"""

from __future__ import annotations

import asyncio
import codecs
import os
import sys
from typing import IO, Any, Optional

import click

ASSISTANT_PREFIX = "🤖: "
NOTICE_PREFIX = "⚙️: "

_READ_SIZE = 4096


def _mark_ready(ready: asyncio.Future) -> None:
    if not ready.done():
        ready.set_result(None)


class TerminalConsole:
    """``agent_core.base.Console`` implementation for an interactive terminal."""

    def __init__(self, stdin: Optional[IO[Any]] = None) -> None:
        """
        Initialize the console.

        Args:
            stdin: Stream to read lines from; defaults to ``sys.stdin``. Only its
                file descriptor (and encoding, when it has one) is used.
        """
        self._stdin = stdin
        self._decoder: Optional[codecs.IncrementalDecoder] = None
        self._pending = ""
        self._eof = False

    @property
    def _input(self) -> IO[Any]:
        return self._stdin if self._stdin is not None else sys.stdin

    async def read_line(self, prompt: str) -> str:
        click.echo(prompt, nl=False)
        line = await self._next_line()
        if line is None:
            # Ctrl-D at the prompt
            click.echo()
            raise EOFError("input closed")
        return line

    async def _next_line(self) -> Optional[str]:
        if self._decoder is None:
            encoding = getattr(self._input, "encoding", None) or "utf-8"
            self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        while "\n" not in self._pending and not self._eof:
            chunk = await self._read_chunk()
            if chunk:
                self._pending += self._decoder.decode(chunk)
            else:
                self._eof = True
                self._pending += self._decoder.decode(b"", final=True)

        if "\n" in self._pending:
            line, self._pending = self._pending.split("\n", 1)
            return line.rstrip("\r")
        if self._pending:
            line, self._pending = self._pending, ""
            return line
        return None

    async def _read_chunk(self) -> bytes:
        loop = asyncio.get_running_loop()
        fd = self._input.fileno()
        ready: asyncio.Future = loop.create_future()
        try:
            loop.add_reader(fd, _mark_ready, ready)
        except NotImplementedError:
            # event loop without reader support (Windows proactor)
            return await asyncio.to_thread(os.read, fd, _READ_SIZE)
        except PermissionError:
            # regular files cannot be polled and never block
            return os.read(fd, _READ_SIZE)
        try:
            await ready
        finally:
            loop.remove_reader(fd)
        return os.read(fd, _READ_SIZE)

    def assistant(self, text: str) -> None:
        click.echo(f"{ASSISTANT_PREFIX}{text}")

    def notice(self, text: str) -> None:
        click.echo(f"{NOTICE_PREFIX}{text}")

    def error(self, text: str) -> None:
        click.secho(text, fg="red", err=True)

    def welcome(self, text: str) -> None:
        click.secho(text, fg="green")

    def farewell(self, text: str) -> None:
        click.secho(text, fg="red")
