"""Split a collected stdin buffer into path records."""

from __future__ import annotations

from collections.abc import Iterator

from .collector import RECORD_SEPARATOR


def iter_path_records(buffer: bytes | bytearray, end: int | None = None) -> Iterator[bytes]:
    """Yield non-empty line-feed separated records from ``buffer[:end]``.

    The buffer is searched in place; only the records themselves are copied.
    The last record is yielded even without a trailing separator. Records are
    raw bytes; nothing is decoded.
    """
    view = memoryview(buffer)
    stop = len(buffer) if end is None else min(end, len(buffer))
    start = 0
    while start < stop:
        sep = buffer.find(RECORD_SEPARATOR, start, stop)
        if sep == -1:
            yield view[start:stop].tobytes()
            return
        if sep > start:
            yield view[start:sep].tobytes()
        start = sep + 1
