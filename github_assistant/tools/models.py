from __future__ import annotations

"""Tool descriptor model.

A ``ToolDescriptor`` identifies one remotely executable Arcade tool: the name
the model sees, the Arcade name used to execute it, its argument schema, and
whether a call needs user authorization or explicit approval first.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel

from .schema import build_args_model, is_mutating_tool_name, tool_name_for


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    qualified_name: str
    description: str
    args_schema: type[BaseModel]
    requires_authorization: bool = False
    requires_approval: bool = False

    @classmethod
    def from_definition(cls, definition: Any, *, requires_approval: Optional[bool] = None) -> "ToolDescriptor":
        """Build a descriptor from an Arcade ``ToolDefinition``.

        Args:
            definition: The Arcade tool definition.
            requires_approval: Override the name-based mutating-tool check.
        """
        qualified_name = qualified_name_of(definition)
        name = tool_name_for(qualified_name)
        short_name = str(getattr(definition, "name", "") or qualified_name.rsplit(".", 1)[-1])
        tool_input = getattr(definition, "input", None)
        requirements = getattr(definition, "requirements", None)
        return cls(
            name=name,
            qualified_name=qualified_name,
            description=str(getattr(definition, "description", "") or name),
            args_schema=build_args_model(name, getattr(tool_input, "parameters", None)),
            requires_authorization=getattr(requirements, "authorization", None) is not None,
            requires_approval=is_mutating_tool_name(short_name) if requires_approval is None else requires_approval,
        )


def qualified_name_of(definition: Any) -> str:
    """``Toolkit.ToolName`` for an Arcade tool definition."""
    qualified = getattr(definition, "qualified_name", None)
    if qualified:
        return str(qualified)
    toolkit = getattr(getattr(definition, "toolkit", None), "name", None)
    name = str(getattr(definition, "name"))
    return f"{toolkit}.{name}" if toolkit else name
