"""Stdin ingestion: collect, tokenize, link, then switch the working location.

Stages run strictly in order. The working location changes and history is
recorded only after every record has been linked or has failed.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .collector import collect_input
from .link_farm import build_link_farm
from .session import EphemeralSession, SessionContext, adopt_session_directory, create_session_directory, discard_session
from .tokenizer import iter_path_records
from .types import IngestLimits

logger = logging.getLogger(__name__)


class IngestStatus(enum.Enum):
    EMPTY = "empty"
    INGESTED = "ingested"


@dataclass(frozen=True)
class IngestResult:
    status: IngestStatus
    session: EphemeralSession | None = None

    @property
    def created(self) -> int:
        return len(self.session.created) if self.session is not None else 0

    @property
    def failed(self) -> int:
        return len(self.session.failed) if self.session is not None else 0


def ingest_paths(context: SessionContext, fd: int, limits: IngestLimits | None = None) -> IngestResult:
    """Turn the path list readable from ``fd`` into the session's working location.

    Returns an ``EMPTY`` result, with nothing touched, when ``fd`` yields no
    bytes. Fatal problems raise ``IngestError`` subclasses and leave
    ``context`` as it was; per-entry link failures are recorded on the
    returned session instead.
    """
    buffer = collect_input(fd, limits)
    if buffer is None:
        return IngestResult(IngestStatus.EMPTY)
    complete_length = buffer.complete_length()
    if not complete_length:
        # Truncated input holding a single partial record.
        return IngestResult(IngestStatus.EMPTY)

    origin_dir = context.working_dir
    session = create_session_directory(context)
    try:
        records = iter_path_records(buffer.data, complete_length)
        session.entries = build_link_farm(records, session.directory_path, origin_dir)
    except BaseException:
        discard_session(context, session)
        raise

    adopt_session_directory(context, session)
    # Relative paths typed later refer to the link farm, not a restored path.
    context.restore_last_path = False
    logger.debug(
        "switched to %s (%d linked, %d failed)",
        session.directory_path,
        len(session.created),
        len(session.failed),
    )
    return IngestResult(IngestStatus.INGESTED, session)
