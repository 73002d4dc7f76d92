"""Ephemeral session directories and the session context that owns them.

``SessionContext`` replaces process-wide "current directory" state with an
explicit value. It is a context manager: leaving it removes every ephemeral
directory still active, on every exit path.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..navigation import DirectoryHistory
from .types import DirectoryCreationError, DirectorySwitchError, LinkEntry

logger = logging.getLogger(__name__)

SESSION_DIR_PREFIX = "pipeview."
MAX_WORKSPACES = 8


@dataclass
class EphemeralSession:
    """One link-farm directory plus the working directory it was built from."""

    directory_path: Path
    origin_working_dir: Path
    entries: list[LinkEntry] = field(default_factory=list)
    active: bool = True

    @property
    def created(self) -> list[LinkEntry]:
        return [entry for entry in self.entries if entry.ok]

    @property
    def failed(self) -> list[LinkEntry]:
        return [entry for entry in self.entries if not entry.ok]

    def cleanup(self) -> bool:
        """Recursively remove the directory once.

        Returns ``False`` when already cleaned up. Removal errors are logged,
        not raised; ``active`` is cleared either way.
        """
        if not self.active:
            return False
        self.active = False
        try:
            shutil.rmtree(self.directory_path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("cannot remove %s: %s", self.directory_path, exc.strerror or exc)
        else:
            logger.debug("removed session directory %s", self.directory_path)
        return True


@dataclass
class SessionContext:
    """Working location and configuration threaded through ingestion."""

    working_dir: Path
    tmp_root: Path
    list_eagerly: bool = False
    history: DirectoryHistory = field(default_factory=DirectoryHistory)
    workspaces: list[Path | None] = field(default_factory=lambda: [None] * MAX_WORKSPACES)
    current_workspace: int = 0
    restore_last_path: bool = True
    change_dir: Callable[[Path], None] = os.chdir
    refresh_listing: Callable[[Path], None] | None = None
    sessions: list[EphemeralSession] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.workspaces[self.current_workspace] is None:
            self.workspaces[self.current_workspace] = self.working_dir
        self.history.record(self.working_dir)

    @property
    def active_session(self) -> EphemeralSession | None:
        """Most recent session still on disk, if any."""
        for session in reversed(self.sessions):
            if session.active:
                return session
        return None

    def close(self) -> None:
        """Remove every ephemeral directory still active. Safe to call twice."""
        for session in self.sessions:
            session.cleanup()

    def __enter__(self) -> SessionContext:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def create_session_directory(context: SessionContext) -> EphemeralSession:
    """Create a uniquely named directory under ``context.tmp_root``.

    The new session is registered on the context so teardown covers it.
    Raises ``DirectoryCreationError`` and leaves the context untouched on
    failure.
    """
    tmp_root = context.tmp_root
    try:
        tmp_root.mkdir(parents=True, exist_ok=True)
        directory = Path(tempfile.mkdtemp(prefix=SESSION_DIR_PREFIX, dir=tmp_root))
    except OSError as exc:
        raise DirectoryCreationError(tmp_root, exc.strerror or str(exc)) from exc

    session = EphemeralSession(directory_path=directory, origin_working_dir=context.working_dir)
    context.sessions.append(session)
    logger.debug("created session directory %s", directory)
    return session


def discard_session(context: SessionContext, session: EphemeralSession) -> None:
    """Remove ``session``'s directory and forget it."""
    session.cleanup()
    if session in context.sessions:
        context.sessions.remove(session)


def adopt_session_directory(context: SessionContext, session: EphemeralSession) -> None:
    """Make ``session``'s directory the working location.

    On a failed switch the directory is removed and ``DirectorySwitchError``
    is raised with the context unchanged. On success exactly one history
    entry is recorded and, if ``list_eagerly`` is set, the listing refreshed.
    """
    directory = session.directory_path
    try:
        context.change_dir(directory)
    except OSError as exc:
        discard_session(context, session)
        raise DirectorySwitchError(directory, exc.strerror or str(exc)) from exc

    context.working_dir = directory
    context.workspaces[context.current_workspace] = directory
    context.history.record(directory)
    if context.list_eagerly and context.refresh_listing is not None:
        context.refresh_listing(directory)
