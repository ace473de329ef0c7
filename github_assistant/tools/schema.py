"""Conversion of Arcade tool definitions into LangChain-friendly pieces.

Arcade describes tool inputs as a list of parameters, each with a value schema
(``val_type`` plus optional ``enum``/``inner_val_type``). LangChain tools take
a pydantic model as ``args_schema``; ``build_args_model`` bridges the two.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, Field, create_model

_SCALAR_TYPES: Dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "json": Dict[str, Any],
}

_MUTATING_PREFIXES = (
    "create",
    "update",
    "delete",
    "remove",
    "merge",
    "manage",
    "assign",
    "submit",
    "resolve",
    "set",
    "write",
    "post",
    "put",
    "patch",
)


def is_mutating_tool_name(name: str) -> bool:
    n = name.lower()
    return n.startswith(_MUTATING_PREFIXES)


def tool_name_for(qualified_name: str) -> str:
    """Model-facing tool name: ``Github.CreateIssue`` -> ``Github_CreateIssue``."""
    return qualified_name.replace(".", "_")


def python_type_for(value_schema: Any) -> Any:
    """Map an Arcade value schema to a Python type annotation."""
    val_type = getattr(value_schema, "val_type", None)
    enum = getattr(value_schema, "enum", None)
    if val_type == "array":
        inner = getattr(value_schema, "inner_val_type", None)
        inner_type = Literal[tuple(enum)] if enum else _SCALAR_TYPES.get(str(inner), Any)
        return List[inner_type]  # type: ignore[valid-type]
    if enum:
        return Literal[tuple(enum)]
    return _SCALAR_TYPES.get(str(val_type), Any)


def build_args_model(tool_name: str, parameters: Optional[Iterable[Any]]) -> type[BaseModel]:
    """Create the pydantic args model for one tool.

    Required parameters are required fields; optional ones default to ``None``.
    """
    fields: Dict[str, Any] = {}
    for param in parameters or ():
        annotation = python_type_for(getattr(param, "value_schema", None))
        description = getattr(param, "description", None)
        if getattr(param, "required", False):
            fields[param.name] = (annotation, Field(..., description=description))
        else:
            fields[param.name] = (Optional[annotation], Field(default=None, description=description))
    return create_model(f"{tool_name}Args", **fields)
