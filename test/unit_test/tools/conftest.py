from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import httpx
import pytest
from arcadepy import APIError


def make_definition(
    name: str,
    *,
    toolkit: str = "Github",
    parameters: Optional[List[Any]] = None,
    authorization: Any = None,
    description: str = "",
) -> SimpleNamespace:
    """Arcade ``ToolDefinition`` stand-in with the attributes the tools package reads."""
    return SimpleNamespace(
        name=name,
        qualified_name=f"{toolkit}.{name}",
        toolkit=SimpleNamespace(name=toolkit),
        description=description or f"{name} tool",
        input=SimpleNamespace(parameters=parameters or []),
        requirements=SimpleNamespace(authorization=authorization) if authorization is not None else None,
    )


def make_api_error(message: str = "boom") -> APIError:
    return APIError(message, httpx.Request("GET", "https://api.arcade.dev/v1/tools"), body=None)


class FakeToolsResource:
    """In-memory replacement for ``AsyncArcade.tools``."""

    def __init__(self, toolkits: Optional[Dict[str, List[Any]]] = None, named: Optional[Dict[str, Any]] = None):
        self.toolkits = toolkits or {}
        self.named = named or {}
        self.list_calls: List[Dict[str, Any]] = []
        self.get_calls: List[str] = []
        self.authorize_calls: List[Dict[str, Any]] = []
        self.execute_calls: List[Dict[str, Any]] = []
        self.list_error: Optional[Exception] = None
        self.authorize_response: Any = SimpleNamespace(status="completed", id="auth-1", url=None)
        self.authorize_error: Optional[Exception] = None
        self.execute_response: Any = SimpleNamespace(success=True, output=SimpleNamespace(value="ok", error=None))
        self.execute_error: Optional[Exception] = None

    def list(self, *, toolkit: str, limit: int):
        self.list_calls.append({"toolkit": toolkit, "limit": limit})
        definitions = self.toolkits.get(toolkit, [])
        error = self.list_error

        async def _pages():
            if error is not None:
                raise error
            for definition in definitions:
                yield definition

        return _pages()

    async def get(self, *, name: str):
        self.get_calls.append(name)
        if name not in self.named:
            raise make_api_error(f"tool {name} not found")
        return self.named[name]

    async def authorize(self, *, tool_name: str, user_id: str):
        self.authorize_calls.append({"tool_name": tool_name, "user_id": user_id})
        if self.authorize_error is not None:
            raise self.authorize_error
        return self.authorize_response

    async def execute(self, *, tool_name: str, input: Dict[str, Any], user_id: str):
        self.execute_calls.append({"tool_name": tool_name, "input": input, "user_id": user_id})
        if self.execute_error is not None:
            raise self.execute_error
        return self.execute_response


@pytest.fixture
def fake_tools() -> FakeToolsResource:
    return FakeToolsResource()


@pytest.fixture
def fake_client(fake_tools: FakeToolsResource) -> SimpleNamespace:
    return SimpleNamespace(tools=fake_tools)


@pytest.fixture(name="make_definition")
def make_definition_fixture():
    return make_definition


@pytest.fixture(name="make_api_error")
def make_api_error_fixture():
    return make_api_error
