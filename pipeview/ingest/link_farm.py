"""Populate a session directory with symlinks to piped path records.

Every record yields exactly one ``LinkEntry``. Per-entry problems (missing
source, permission errors, name clashes) become ``FAILED`` entries and never
stop the batch.

Name clashes are settled first-linked-wins: a name is claimed only once a
record's symlink has been created. Later records with the same final
component then fail without touching the filesystem, while a record that
failed earlier never blocks a later one.
"""

from __future__ import annotations

import errno
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .types import LinkEntry

logger = logging.getLogger(__name__)


def resolve_source(record: bytes, origin_dir: Path) -> Path:
    """Return the absolute source path for ``record``.

    Relative records are joined onto ``origin_dir``, the working directory
    captured before the session switched away from it. No normalization or
    symlink resolution is applied.
    """
    source = Path(os.fsdecode(record))
    if source.is_absolute():
        return source
    return origin_dir / source


def link_name_for(source: Path) -> str:
    """Return the link name for ``source``: its final path component.

    ``Path`` already drops trailing slashes, so ``dir/`` is named ``dir``.
    The filesystem root has no final component and yields ``""``.
    """
    name = source.name
    if name in ("", ".", ".."):
        return ""
    return name


def _describe_os_error(exc: OSError) -> str:
    if exc.errno is not None:
        return os.strerror(exc.errno)
    return str(exc)


def link_record(record: bytes, target_dir: Path, origin_dir: Path, claimed: dict[str, Path]) -> LinkEntry:
    """Create one symlink in ``target_dir`` for ``record``.

    ``claimed`` maps link names already taken in this batch to their source and
    is updated when a link is created.
    """
    source = resolve_source(record, origin_dir)
    name = link_name_for(source)
    if not name:
        return LinkEntry.failed(source, name, "path has no final component to name a link after")

    first = claimed.get(name)
    if first is not None:
        return LinkEntry.failed(source, name, f"name already linked from {first}")

    try:
        os.lstat(source)
    except OSError as exc:
        return LinkEntry.failed(source, name, _describe_os_error(exc))
    except ValueError as exc:
        # embedded NUL byte
        return LinkEntry.failed(source, name, str(exc))

    try:
        os.symlink(source, target_dir / name)
    except FileExistsError:
        return LinkEntry.failed(source, name, os.strerror(errno.EEXIST))
    except OSError as exc:
        return LinkEntry.failed(source, name, _describe_os_error(exc))

    claimed[name] = source
    return LinkEntry.created(source, name)


def iter_link_results(records: Iterable[bytes], target_dir: Path, origin_dir: Path) -> Iterator[LinkEntry]:
    """Yield one ``LinkEntry`` per record, in input order."""
    claimed: dict[str, Path] = {}
    for record in records:
        yield link_record(record, target_dir, origin_dir, claimed)


def build_link_farm(records: Iterable[bytes], target_dir: Path, origin_dir: Path) -> list[LinkEntry]:
    """Drain ``iter_link_results`` and log every failed entry as a warning."""
    entries: list[LinkEntry] = []
    for entry in iter_link_results(records, target_dir, origin_dir):
        if not entry.ok:
            logger.warning("ln: '%s': %s", entry.source, entry.reason)
        entries.append(entry)
    created = sum(1 for entry in entries if entry.ok)
    logger.debug("linked %d of %d path(s) into %s", created, len(entries), target_dir)
    return entries
