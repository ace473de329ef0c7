"""Ctrl-C at the input prompt, exercised against a real process.

SIGINT is delivered to the real process, so the behaviour cannot be reproduced
with ``CliRunner``; the session runs in a child interpreter instead.
"""

import os
import select
import signal
import subprocess
import sys
import time

import pytest

from github_assistant.agent_core.session import FAREWELL_MESSAGE, WELCOME_MESSAGE

# Runs the real command and console with a session that never touches the network.
_SESSION_SCRIPT = """
import signal
signal.signal(signal.SIGINT, signal.default_int_handler)

from unittest.mock import patch

from github_assistant.agent_core.session import SessionLoop
from github_assistant.cli import main as cli_main
from github_assistant.cli.console import TerminalConsole


async def _offline_session(config, settings):
    await SessionLoop(runtime=None, resolver=None, console=TerminalConsole()).run()


with patch.object(cli_main, "run_session", _offline_session):
    cli_main.main(["--no-log-file"])
"""


def _read_until(proc: subprocess.Popen, marker: bytes, timeout: float) -> bytes:
    buffer = b""
    deadline = time.monotonic() + timeout
    fd = proc.stdout.fileno()
    while marker not in buffer:
        remaining = deadline - time.monotonic()
        if remaining <= 0 or proc.poll() is not None:
            break
        ready, _, _ = select.select([fd], [], [], remaining)
        if ready:
            chunk = os.read(fd, 4096)
            if not chunk:
                break
            buffer += chunk
    return buffer


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")
def test_sigint_at_prompt_ends_session_with_farewell(tmp_path):
    env = dict(os.environ)
    env.update(
        {
            "ARCADE_USER_ID": "octocat@example.com",
            "OPENAI_MODEL": "gpt-4o",
            "PYTHONIOENCODING": "utf-8",
            "PYTHONUNBUFFERED": "1",
        }
    )
    proc = subprocess.Popen(
        [sys.executable, "-c", _SESSION_SCRIPT],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=tmp_path,
        env=env,
    )
    try:
        before = _read_until(proc, b">", timeout=60)
        assert WELCOME_MESSAGE.encode("utf-8") in before

        proc.send_signal(signal.SIGINT)
        out, err = proc.communicate(timeout=30)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.communicate()

    output = (before + out).decode("utf-8", errors="replace")
    assert proc.returncode == 0, err.decode("utf-8", errors="replace")
    assert FAREWELL_MESSAGE in output
    assert b"Traceback" not in err
