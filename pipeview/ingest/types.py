"""Value types and error hierarchy shared by the stdin ingestion stages."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CHUNK_SIZE = 512 * 1024
DEFAULT_MAX_CHUNKS = 512


@dataclass(frozen=True)
class IngestLimits:
    """Read-growth policy: ``max_chunks`` chunks of ``chunk_size`` bytes."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_chunks: int = DEFAULT_MAX_CHUNKS

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.max_chunks < 1:
            raise ValueError(f"max_chunks must be >= 1, got {self.max_chunks}")

    @property
    def ceiling(self) -> int:
        return self.chunk_size * self.max_chunks


class LinkStatus(enum.Enum):
    CREATED = "created"
    FAILED = "failed"


@dataclass(frozen=True)
class LinkEntry:
    """Outcome of linking one path record into the session directory."""

    source: Path
    destination: str
    status: LinkStatus
    reason: str | None = None

    @classmethod
    def created(cls, source: Path, destination: str) -> LinkEntry:
        return cls(source=source, destination=destination, status=LinkStatus.CREATED)

    @classmethod
    def failed(cls, source: Path, destination: str, reason: str) -> LinkEntry:
        return cls(source=source, destination=destination, status=LinkStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is LinkStatus.CREATED


class IngestError(Exception):
    """Fatal ingestion failure; the session is left as it was."""


class InputReadError(IngestError):
    """Reading standard input failed part way through."""


class DirectoryCreationError(IngestError):
    """The ephemeral session directory could not be created."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class DirectorySwitchError(IngestError):
    """Switching the working location to the session directory failed."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
