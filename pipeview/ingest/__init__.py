"""Stdin path-list ingestion into an ephemeral link-farm directory.

This package contains the non-UI ingestion stages:
- bounded stdin collection and line-feed tokenizing
- per-record symlink creation with failure reporting
- session-directory creation, adoption, and teardown
"""

from __future__ import annotations

from .collector import RawInputBuffer, collect_input
from .link_farm import build_link_farm, iter_link_results, link_name_for, resolve_source
from .pipeline import IngestResult, IngestStatus, ingest_paths
from .session import EphemeralSession, SessionContext, adopt_session_directory, create_session_directory
from .tokenizer import iter_path_records
from .types import (
    DirectoryCreationError,
    DirectorySwitchError,
    IngestError,
    IngestLimits,
    InputReadError,
    LinkEntry,
    LinkStatus,
)

__all__ = [
    "DirectoryCreationError",
    "DirectorySwitchError",
    "EphemeralSession",
    "IngestError",
    "IngestLimits",
    "IngestResult",
    "IngestStatus",
    "InputReadError",
    "LinkEntry",
    "LinkStatus",
    "RawInputBuffer",
    "SessionContext",
    "adopt_session_directory",
    "build_link_farm",
    "collect_input",
    "create_session_directory",
    "ingest_paths",
    "iter_link_results",
    "iter_path_records",
    "link_name_for",
    "resolve_source",
]
