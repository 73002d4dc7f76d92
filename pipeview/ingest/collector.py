"""Read piped standard input into a bounded, chunk-grown byte buffer.

The buffer never grows past ``IngestLimits.ceiling`` bytes. Input beyond the
ceiling is detected with one extra one-byte read and reported via
``RawInputBuffer.truncated``; the remaining bytes are left unread.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .types import IngestLimits, InputReadError

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = b"\n"


@dataclass
class RawInputBuffer:
    """Bytes collected from one read of standard input."""

    limits: IngestLimits = field(default_factory=IngestLimits)
    data: bytearray = field(default_factory=bytearray)
    truncated: bool = False

    @property
    def used(self) -> int:
        return len(self.data)

    @property
    def chunks(self) -> int:
        """Number of ``chunk_size`` chunks the buffer has grown into."""
        return -(-self.used // self.limits.chunk_size)

    @property
    def remaining(self) -> int:
        return self.limits.ceiling - self.used

    def extend(self, chunk: bytes) -> None:
        if len(chunk) > self.remaining:
            raise ValueError("chunk would grow buffer past its ceiling")
        self.data.extend(chunk)

    def complete_length(self) -> int:
        """Return how many leading bytes hold complete records.

        A truncated buffer is cut after its last separator; without any
        separator nothing is complete, since its only record is partial.
        """
        if not self.truncated:
            return self.used
        return self.data.rfind(RECORD_SEPARATOR) + 1


def _read(fd: int, size: int) -> bytes:
    try:
        return os.read(fd, size)
    except OSError as exc:
        raise InputReadError(f"cannot read standard input: {exc.strerror or exc}") from exc


def collect_input(fd: int, limits: IngestLimits | None = None) -> RawInputBuffer | None:
    """Read ``fd`` to EOF or to the ceiling, whichever comes first.

    Returns ``None`` when nothing was read. Raises ``InputReadError`` on the
    first failing read; the partial buffer is discarded.
    """
    buffer = RawInputBuffer(limits=limits or IngestLimits())
    chunk_size = buffer.limits.chunk_size
    while buffer.remaining > 0:
        chunk = _read(fd, min(chunk_size, buffer.remaining))
        if not chunk:
            break
        buffer.extend(chunk)
    else:
        if _read(fd, 1):
            buffer.truncated = True
            logger.warning(
                "standard input exceeds %d bytes; ignoring the rest",
                buffer.limits.ceiling,
            )

    if buffer.used == 0:
        logger.debug("standard input was empty")
        return None
    logger.debug("read %d bytes in %d chunk(s) from standard input", buffer.used, buffer.chunks)
    return buffer
