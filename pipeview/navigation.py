"""Directory navigation history.

This module intentionally has no UI concerns.
It keeps a bounded log of visited directories.
"""

from __future__ import annotations

from pathlib import Path

MAX_DIRECTORY_HISTORY = 256


def _normalized(path: Path) -> Path:
    """Return ``path`` made absolute without resolving symlinks."""
    try:
        return path.absolute()
    except OSError:
        return path


class DirectoryHistory:
    """Bounded log of visited directories.

    Adjacent duplicate directories are suppressed to avoid no-op entries.
    """

    def __init__(self, max_entries: int = MAX_DIRECTORY_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self._visited: list[Path] = []

    def entries(self) -> list[Path]:
        """Return visited directories, oldest first."""
        return list(self._visited)

    def record(self, directory: Path) -> bool:
        """Append a visited directory unless it repeats the latest entry.

        Returns whether a new entry was appended.
        """
        directory = _normalized(directory)
        if self._visited and self._visited[-1] == directory:
            return False
        self._visited.append(directory)
        overflow = len(self._visited) - self.max_entries
        if overflow > 0:
            del self._visited[:overflow]
        return True
