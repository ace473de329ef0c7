from __future__ import annotations

import pytest

ASSISTANT_ENV_VARS = (
    "ARCADE_USER_ID",
    "OPENAI_MODEL",
    "ARCADE_API_KEY",
    "ARCADE_BASE_URL",
    "OPENAI_API_KEY",
    "GITHUB_ASSISTANT_LOG_LEVEL",
    "GITHUB_ASSISTANT_AUTHORIZATION_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run every test without the developer's assistant settings or .env file."""
    for name in ASSISTANT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def required_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    values = {"ARCADE_USER_ID": "octocat@example.com", "OPENAI_MODEL": "gpt-4o"}
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values
