from __future__ import annotations

"""Update types yielded while the agent runtime advances a turn.

The runtime stream interleaves two kinds of updates:

- ``MessageUpdate``: a message produced by a graph node (model replies and
  tool results), already rendered for the terminal.
- a pause event (see ``agent_core.interrupts``) when a gated tool call needs
  human input before the turn can continue.
"""

from dataclasses import dataclass, field
from typing import Any, Union

from ..interrupts import PauseEvent


@dataclass(frozen=True)
class MessageUpdate:
    """A message emitted by one node of the agent graph."""

    node: str
    text: str
    message: Any = field(default=None, compare=False, repr=False)


TurnUpdate = Union[MessageUpdate, PauseEvent]
