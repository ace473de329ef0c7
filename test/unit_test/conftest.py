from __future__ import annotations

from typing import Iterable, List

import pytest


class FakeConsole:
    """In-memory ``Console`` that replays scripted input lines."""

    def __init__(self, inputs: Iterable[str] = ()) -> None:
        self.inputs: List[str] = list(inputs)
        self.prompts: List[str] = []
        self.assistant_lines: List[str] = []
        self.notices: List[str] = []
        self.errors: List[str] = []
        self.welcomes: List[str] = []
        self.farewells: List[str] = []

    async def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.inputs:
            raise EOFError("no more input")
        return self.inputs.pop(0)

    def assistant(self, text: str) -> None:
        self.assistant_lines.append(text)

    def notice(self, text: str) -> None:
        self.notices.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)

    def welcome(self, text: str) -> None:
        self.welcomes.append(text)

    def farewell(self, text: str) -> None:
        self.farewells.append(text)


@pytest.fixture
def make_console():
    return FakeConsole
