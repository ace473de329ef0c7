from __future__ import annotations

"""Pause events and decisions exchanged with the agent runtime.

When a gated tool call needs human input, LangGraph suspends the turn and
emits an ``Interrupt`` whose ``value`` is a plain dict. ``parse_pause_event``
turns that dict into one arm of a closed sum type:

- ``AuthorizationPause``: the tool needs the user to finish an OAuth flow in a
  browser before Arcade can run it.
- ``ApprovalPause``: the tool call is sensitive and the user must approve it.
- ``UnknownPause``: anything else. Unknown pauses are always denied.

Every pause collected during one drain of the runtime stream receives exactly
one ``Decision``; ``bundle_decisions`` packages them for the resume command.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

AUTHORIZATION_REQUIRED_KEY = "authorization_required"
APPROVAL_REQUIRED_KEY = "hitl_required"


@dataclass(frozen=True)
class AuthorizationPause:
    """The runtime paused because a tool needs user authorization."""

    tool_name: str
    authorization_id: str
    url: Optional[str]
    interrupt_id: Optional[str] = None


@dataclass(frozen=True)
class ApprovalPause:
    """The runtime paused because a tool call needs explicit user approval."""

    tool_name: str
    tool_input: Mapping[str, Any] = field(default_factory=dict)
    interrupt_id: Optional[str] = None


@dataclass(frozen=True)
class UnknownPause:
    """A pause whose payload matches no known shape."""

    value: Any
    interrupt_id: Optional[str] = None


PauseEvent = Union[AuthorizationPause, ApprovalPause, UnknownPause]


@dataclass(frozen=True)
class Decision:
    """The user's answer to a single pause event."""

    authorized: bool

    def to_resume(self) -> dict[str, bool]:
        """Payload returned by ``interrupt()`` inside the paused tool."""
        return {"authorized": self.authorized}


DENIED = Decision(authorized=False)
GRANTED = Decision(authorized=True)

DecisionBundle = Union[Decision, tuple[Decision, ...]]


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def parse_pause_event(interrupt: Any) -> PauseEvent:
    """Classify a LangGraph ``Interrupt`` (or anything exposing ``value``/``id``).

    Malformed authorization payloads (no authorization id to wait on) are
    classified as ``UnknownPause`` so they fail closed.
    """
    interrupt_id = getattr(interrupt, "id", None)
    value = getattr(interrupt, "value", interrupt)
    if not isinstance(value, Mapping):
        return UnknownPause(value=value, interrupt_id=interrupt_id)

    tool_name = str(value.get("tool_name") or "")
    if value.get(AUTHORIZATION_REQUIRED_KEY):
        response = value.get("authorization_response")
        authorization_id = _get(response, "id") if response is not None else None
        if not authorization_id:
            return UnknownPause(value=value, interrupt_id=interrupt_id)
        return AuthorizationPause(
            tool_name=tool_name,
            authorization_id=str(authorization_id),
            url=_get(response, "url"),
            interrupt_id=interrupt_id,
        )
    if value.get(APPROVAL_REQUIRED_KEY):
        tool_input = value.get("input")
        return ApprovalPause(
            tool_name=tool_name,
            tool_input=dict(tool_input) if isinstance(tool_input, Mapping) else {"input": tool_input},
            interrupt_id=interrupt_id,
        )
    return UnknownPause(value=value, interrupt_id=interrupt_id)


def bundle_decisions(decisions: Sequence[Decision]) -> DecisionBundle:
    """Return the single decision for one pause, else an ordered tuple.

    Raises:
        ValueError: If ``decisions`` is empty.
    """
    if not decisions:
        raise ValueError("cannot bundle an empty list of decisions")
    if len(decisions) == 1:
        return decisions[0]
    return tuple(decisions)


def unbundle_decisions(bundle: DecisionBundle) -> tuple[Decision, ...]:
    """Inverse of ``bundle_decisions``."""
    if isinstance(bundle, Decision):
        return (bundle,)
    return tuple(bundle)
