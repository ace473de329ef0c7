"""Agent session core: pause events, interrupt resolution and the session loop.

Design overview
---------------

The agent itself (reasoning, tool dispatch, conversation checkpointing) is a
LangChain agent graph running on LangGraph. This package holds the thin layer
around it:

- ``interrupts``: the closed set of pause events a turn can raise, and the
  decisions that resume it.
- ``resolver.InterruptResolver``: turns one pause event into one decision by
  talking to the user (browser authorization or yes/no approval).
- ``runtime.AgentRuntime``: streams one turn of the agent graph.
- ``session.SessionLoop``: the read-eval-print loop tying them together.
"""

from .interrupts import (
    ApprovalPause,
    AuthorizationPause,
    Decision,
    PauseEvent,
    UnknownPause,
    bundle_decisions,
    parse_pause_event,
)
from .resolver import InterruptResolver
from .session import SessionLoop

__all__ = [
    "ApprovalPause",
    "AuthorizationPause",
    "Decision",
    "PauseEvent",
    "UnknownPause",
    "bundle_decisions",
    "parse_pause_event",
    "InterruptResolver",
    "SessionLoop",
]
