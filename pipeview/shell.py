"""Launch the interactive command that browses the session directory.

Runs ``--command`` if given, otherwise ``$SHELL``, with the session directory
as its working directory.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from pathlib import Path

FALLBACK_SHELL = "/bin/sh"


def resolve_command(command: str | None) -> list[str]:
    """Split ``command`` (or ``$SHELL``) into an argv list."""
    raw = command if command is not None else os.environ.get("SHELL", "").strip()
    cmd = shlex.split(raw) if raw else []
    return cmd or [FALLBACK_SHELL]


def launch_command(directory: Path, command: str | None = None) -> int:
    """Run the interactive command in ``directory`` and return its exit status.

    ``PIPEVIEW_DIR`` is exported so the child (and its prompt) can tell it is
    inside a session.
    """
    cmd = resolve_command(command)
    env = dict(os.environ)
    env["PIPEVIEW_DIR"] = str(directory)
    env["PWD"] = str(directory)
    try:
        completed = subprocess.run(cmd, cwd=directory, env=env, check=False)
    except OSError as exc:
        raise SystemExit(f"pipeview: cannot launch {cmd[0]}: {exc.strerror or exc}") from exc
    return completed.returncode
