"""LangGraph-based agent runtime.

The runtime wraps a LangChain agent graph (model + Arcade tools + in-memory
checkpointer) and streams one turn at a time. Pauses raised by gated tools
surface as pause events; resuming feeds the user's decisions back into the
paused tools.

The main entry point is ``AgentRuntime``.
"""

from .engine import AgentRuntime
from .models import MessageUpdate, TurnUpdate

__all__ = [
    "AgentRuntime",
    "MessageUpdate",
    "TurnUpdate",
]
