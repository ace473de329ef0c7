from __future__ import annotations

"""LangGraph agent runtime adapter.

``AgentRuntime`` owns the compiled LangChain agent graph and exposes the one
operation the session loop needs: advance the conversation by one input and
yield incremental updates until the turn finishes or pauses.

Inputs
------

- ``AgentRuntime.user_message(text)`` starts a new turn.
- ``AgentRuntime.resume_command(events, bundle)`` resumes a paused turn with
  one decision per pause event, in event order.

Conversation state lives in the graph checkpointer, addressed by the thread id
from ``AgentConfig``; this module never reads or writes it directly.
"""

import logging
from typing import Any, AsyncIterator, Mapping, Optional, Sequence

from langchain.agents import create_agent
from langchain.chat_models import init_chat_model
from langchain_core.tools import BaseTool
from langgraph.checkpoint.memory import InMemorySaver
from langgraph.types import Command

from ...core.config import AgentConfig
from ..interrupts import DecisionBundle, PauseEvent, parse_pause_event, unbundle_decisions
from .models import MessageUpdate, TurnUpdate

logger = logging.getLogger(__name__)

INTERRUPT_KEY = "__interrupt__"


class AgentRuntime:
    """Drive a LangChain agent graph one turn at a time."""

    def __init__(self, *, agent: Any, config: AgentConfig) -> None:
        """
        Initialize the runtime around an already compiled agent graph.

        Args:
            agent: A compiled LangGraph graph exposing ``astream``.
            config: The session configuration (thread id in particular).
        """
        self._agent = agent
        self._config = config

    @classmethod
    def create(
        cls,
        config: AgentConfig,
        tools: Sequence[BaseTool],
        *,
        model: Any = None,
        checkpointer: Any = None,
        model_kwargs: Optional[Mapping[str, Any]] = None,
    ) -> "AgentRuntime":
        """Build the agent graph from configuration.

        Args:
            config: Session configuration (prompt, model id, thread id).
            tools: LangChain tools the agent may call.
            model: Optional chat model instance; by default one is created from
                ``config.model`` with ``init_chat_model``.
            checkpointer: Conversation-state store; defaults to ``InMemorySaver``.
            model_kwargs: Extra keyword arguments for ``init_chat_model`` (e.g. ``api_key``).
        """
        chat_model = model if model is not None else init_chat_model(config.model, **dict(model_kwargs or {}))
        agent = create_agent(
            model=chat_model,
            tools=list(tools),
            system_prompt=config.system_prompt,
            checkpointer=checkpointer if checkpointer is not None else InMemorySaver(),
        )
        logger.info(f"Agent created: model={config.model}, tools={len(tools)}, thread_id={config.thread_id}")
        return cls(agent=agent, config=config)

    @staticmethod
    def user_message(text: str) -> dict[str, Any]:
        """Agent input for a fresh user turn."""
        return {"messages": [{"role": "user", "content": text}]}

    @staticmethod
    def resume_command(events: Sequence[PauseEvent], bundle: DecisionBundle) -> Command:
        """Build the resume command for the pauses collected in one drain cycle.

        A single pause resumes with its payload directly. Several pauses resume
        with a mapping from interrupt id to payload, inserted in event order.

        Raises:
            ValueError: If the number of decisions differs from the number of
                events, or an event lacks the interrupt id needed to address it.
        """
        decisions = unbundle_decisions(bundle)
        if len(decisions) != len(events):
            raise ValueError(f"expected {len(events)} decisions, got {len(decisions)}")
        if len(decisions) == 1:
            return Command(resume=decisions[0].to_resume())

        resume: dict[str, Any] = {}
        for event, decision in zip(events, decisions):
            if event.interrupt_id is None:
                raise ValueError(f"pause event has no interrupt id: {event!r}")
            resume[event.interrupt_id] = decision.to_resume()
        return Command(resume=resume)

    async def advance(self, agent_input: Any) -> AsyncIterator[TurnUpdate]:
        """Advance the conversation with ``agent_input`` and yield updates.

        The stream ends when the turn completes or the graph pauses; callers
        must drain it fully before deciding whether to resume.
        """
        stream = self._agent.astream(agent_input, self._config.runnable_config, stream_mode="updates")
        async for chunk in stream:
            if not isinstance(chunk, Mapping):
                continue
            if INTERRUPT_KEY in chunk:
                for interrupt in chunk[INTERRUPT_KEY] or ():
                    event = parse_pause_event(interrupt)
                    logger.debug(f"Turn paused: {event!r}")
                    yield event
                continue
            for node, update in chunk.items():
                for message in _messages_of(update):
                    yield MessageUpdate(node=str(node), text=_render(message), message=message)


def _messages_of(update: Any) -> list[Any]:
    if not isinstance(update, Mapping):
        return []
    messages = update.get("messages")
    if messages is None:
        return []
    if isinstance(messages, (list, tuple)):
        return list(messages)
    return [messages]


def _render(message: Any) -> str:
    pretty = getattr(message, "pretty_repr", None)
    if callable(pretty):
        return str(pretty())
    return str(message)
