"""GitHub assistant.

An interactive command-line chat client that connects a LangChain agent to the
Arcade GitHub toolkit.

High-level architecture
-----------------------

- **Tool provisioning** (``github_assistant.tools``): tool definitions are
  fetched from Arcade and wrapped as LangChain tools. Mutating tools pause for
  user approval; tools needing OAuth pause for browser authorization.
- **Agent runtime** (``github_assistant.agent_core.runtime``): a LangChain
  agent graph on LangGraph with an in-memory checkpointer, streamed one turn at
  a time.
- **Interrupt resolution** (``github_assistant.agent_core.resolver``): each
  pause becomes one yes/no decision, fed back to resume the turn.
- **Session loop** (``github_assistant.agent_core.session``): the
  read-eval-print loop behind the ``github-assistant`` command.

Typical workflow
----------------

1. Load ``Settings`` from the environment / ``.env`` (fails fast when
   ``ARCADE_USER_ID`` or ``OPENAI_MODEL`` is missing).
2. Fetch tools for the configured toolkits.
3. Build the agent runtime.
4. Loop: read a line, stream the agent's answer, resolve pauses, resume.
"""
