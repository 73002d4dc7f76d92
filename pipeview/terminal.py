"""Terminal helpers for switching stdin between a pipe and the tty.

After a piped path list has been consumed, stdin must point back at the
controlling terminal so interactive programs launched afterwards read keys.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

CONTROLLING_TTY = "/dev/tty"


def stdin_is_interactive(stdin_fd: int = 0) -> bool:
    """Return whether ``stdin_fd`` is attached to a terminal."""
    try:
        return os.isatty(stdin_fd)
    except OSError:
        return False


def reattach_stdin_to_tty(stdin_fd: int = 0, stdout_fd: int = 1) -> bool:
    """Point ``stdin_fd`` at the controlling terminal.

    Falls back to duplicating ``stdout_fd`` when it is a tty but
    ``/dev/tty`` cannot be opened. Returns whether stdin is interactive
    afterwards.
    """
    try:
        tty_fd = os.open(CONTROLLING_TTY, os.O_RDWR)
    except OSError as exc:
        logger.debug("cannot open %s: %s", CONTROLLING_TTY, exc.strerror or exc)
        if not stdin_is_interactive(stdout_fd):
            return stdin_is_interactive(stdin_fd)
        os.dup2(stdout_fd, stdin_fd)
        return stdin_is_interactive(stdin_fd)

    try:
        os.dup2(tty_fd, stdin_fd)
    finally:
        os.close(tty_fd)
    return stdin_is_interactive(stdin_fd)
