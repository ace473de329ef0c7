"""Unit tests for gated Arcade tool execution.

``interrupt`` is patched so the tests can play the part of the session loop:
the mock records the pause payload and returns the resume value.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest
from pydantic import BaseModel

from github_assistant.tools.gating import GatedToolExecutor, build_langchain_tool
from github_assistant.tools.models import ToolDescriptor

INTERRUPT_TARGET = "github_assistant.tools.gating.interrupt"


class _NoArgs(BaseModel):
    pass


def _descriptor(name: str = "ListIssues", *, authorization: bool = False, approval: bool = False) -> ToolDescriptor:
    return ToolDescriptor(
        name=f"Github_{name}",
        qualified_name=f"Github.{name}",
        description=f"{name} tool",
        args_schema=_NoArgs,
        requires_authorization=authorization,
        requires_approval=approval,
    )


class TestUngatedExecution:
    """Test tools that need neither approval nor authorization."""

    @pytest.mark.asyncio
    async def test_executes_without_pausing(self, fake_client, fake_tools):
        executor = GatedToolExecutor(fake_client, "octocat")

        with patch(INTERRUPT_TARGET) as mock_interrupt:
            result = await executor.run(_descriptor(), {"owner": "octo", "state": None})

        assert result == "ok"
        mock_interrupt.assert_not_called()
        assert fake_tools.authorize_calls == []
        assert fake_tools.execute_calls == [
            {"tool_name": "Github.ListIssues", "input": {"owner": "octo"}, "user_id": "octocat"}
        ]

    @pytest.mark.asyncio
    async def test_structured_output_is_serialized(self, fake_client, fake_tools):
        fake_tools.execute_response = SimpleNamespace(
            success=True, output=SimpleNamespace(value={"title": "Bug", "number": 3}, error=None)
        )

        result = await GatedToolExecutor(fake_client, "octocat").run(_descriptor(), {})

        assert result == '{"title": "Bug", "number": 3}'

    @pytest.mark.asyncio
    async def test_output_error_is_reported_as_text(self, fake_client, fake_tools):
        fake_tools.execute_response = SimpleNamespace(
            success=False, output=SimpleNamespace(value=None, error=SimpleNamespace(message="repo not found"))
        )

        result = await GatedToolExecutor(fake_client, "octocat").run(_descriptor(), {})

        assert result == "Error: Tool execution failed for 'Github_ListIssues': repo not found"

    @pytest.mark.asyncio
    async def test_api_error_is_reported_as_text(self, fake_client, fake_tools, make_api_error):
        fake_tools.execute_error = make_api_error("rate limited")

        result = await GatedToolExecutor(fake_client, "octocat").run(_descriptor(), {})

        assert result.startswith("Error: Tool execution failed for 'Github_ListIssues'")
        assert "rate limited" in result


class TestApprovalGate:
    """Test the approval pause for mutating tools."""

    @pytest.mark.asyncio
    async def test_declined_call_is_not_executed(self, fake_client, fake_tools):
        descriptor = _descriptor("CreateIssue", approval=True)

        with patch(INTERRUPT_TARGET, return_value={"authorized": False}) as mock_interrupt:
            result = await GatedToolExecutor(fake_client, "octocat").run(descriptor, {"title": "Bug"})

        mock_interrupt.assert_called_once_with(
            {"hitl_required": True, "tool_name": "Github_CreateIssue", "input": {"title": "Bug"}}
        )
        assert result == "The user declined the Github_CreateIssue tool call. It was not executed."
        assert fake_tools.execute_calls == []

    @pytest.mark.asyncio
    async def test_approved_call_is_executed(self, fake_client, fake_tools):
        descriptor = _descriptor("CreateIssue", approval=True)

        with patch(INTERRUPT_TARGET, return_value={"authorized": True}):
            result = await GatedToolExecutor(fake_client, "octocat").run(descriptor, {"title": "Bug"})

        assert result == "ok"
        assert len(fake_tools.execute_calls) == 1


class TestAuthorizationGate:
    """Test the authorization pause for tools with an authorization requirement."""

    @pytest.mark.asyncio
    async def test_already_authorized_does_not_pause(self, fake_client, fake_tools):
        with patch(INTERRUPT_TARGET) as mock_interrupt:
            result = await GatedToolExecutor(fake_client, "octocat").run(_descriptor(authorization=True), {})

        assert result == "ok"
        mock_interrupt.assert_not_called()
        assert fake_tools.authorize_calls == [{"tool_name": "Github.ListIssues", "user_id": "octocat"}]

    @pytest.mark.asyncio
    async def test_pending_authorization_pauses_with_url(self, fake_client, fake_tools):
        fake_tools.authorize_response = SimpleNamespace(status="pending", id="auth-7", url="https://example.com/a")

        with patch(INTERRUPT_TARGET, return_value={"authorized": True}) as mock_interrupt:
            result = await GatedToolExecutor(fake_client, "octocat").run(_descriptor(authorization=True), {})

        mock_interrupt.assert_called_once_with(
            {
                "authorization_required": True,
                "tool_name": "Github_ListIssues",
                "authorization_response": {"id": "auth-7", "url": "https://example.com/a", "status": "pending"},
            }
        )
        assert result == "ok"

    @pytest.mark.asyncio
    async def test_denied_authorization_is_not_executed(self, fake_client, fake_tools):
        fake_tools.authorize_response = SimpleNamespace(status="pending", id="auth-7", url="https://example.com/a")

        with patch(INTERRUPT_TARGET, return_value={"authorized": False}):
            result = await GatedToolExecutor(fake_client, "octocat").run(_descriptor(authorization=True), {})

        assert result == "Authorization for Github_ListIssues was not granted. The tool was not executed."
        assert fake_tools.execute_calls == []

    @pytest.mark.asyncio
    async def test_authorize_failure_is_reported_as_text(self, fake_client, fake_tools, make_api_error):
        fake_tools.authorize_error = make_api_error("bad user")

        result = await GatedToolExecutor(fake_client, "octocat").run(_descriptor(authorization=True), {})

        assert "authorization request failed" in result
        assert fake_tools.execute_calls == []

    @pytest.mark.asyncio
    async def test_approval_pause_precedes_authorization_pause(self, fake_client, fake_tools):
        fake_tools.authorize_response = SimpleNamespace(status="pending", id="auth-7", url="u")
        descriptor = _descriptor("MergePullRequest", authorization=True, approval=True)

        with patch(INTERRUPT_TARGET, side_effect=[{"authorized": True}, {"authorized": True}]) as mock_interrupt:
            result = await GatedToolExecutor(fake_client, "octocat").run(descriptor, {})

        payloads = [call.args[0] for call in mock_interrupt.call_args_list]
        assert "hitl_required" in payloads[0]
        assert "authorization_required" in payloads[1]
        assert result == "ok"

    @pytest.mark.asyncio
    async def test_declined_approval_skips_authorization(self, fake_client, fake_tools):
        descriptor = _descriptor("MergePullRequest", authorization=True, approval=True)

        with patch(INTERRUPT_TARGET, return_value={"authorized": False}):
            await GatedToolExecutor(fake_client, "octocat").run(descriptor, {})

        assert fake_tools.authorize_calls == []


@pytest.mark.asyncio
async def test_langchain_tool_delegates_to_executor(fake_client, fake_tools):
    tool = build_langchain_tool(_descriptor(), GatedToolExecutor(fake_client, "octocat"))

    assert tool.name == "Github_ListIssues"
    assert tool.description == "ListIssues tool"
    assert await tool.ainvoke({}) == "ok"
