"""JSON config loading helpers.

Reads the ephemeral-directory root, the eager-listing preference, and the
stdin read limits. All access is defensive: malformed or missing config
falls back safely.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "pipeview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
TMP_ROOT_ENV = "PIPEVIEW_TMPDIR"
FALLBACK_TMP_ROOT = Path("/tmp")


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_positive_int(key: str) -> int | None:
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_tmp_root() -> Path:
    """Return the root under which ephemeral session directories are created.

    Resolution order: config ``tmp_root``, ``$PIPEVIEW_TMPDIR``, ``$TMPDIR``,
    then ``/tmp``.
    """
    value = load_config().get("tmp_root")
    if isinstance(value, str) and value.strip():
        return Path(value.strip()).expanduser()
    for env_name in (TMP_ROOT_ENV, "TMPDIR"):
        env_value = os.environ.get(env_name, "").strip()
        if env_value:
            return Path(env_value).expanduser()
    return FALLBACK_TMP_ROOT


def load_list_eagerly() -> bool:
    """Return whether the listing refreshes right after a directory switch.

    Only explicit boolean values are accepted; anything else means ``True``.
    """
    value = load_config().get("list_eagerly")
    return value if isinstance(value, bool) else True


def load_chunk_size() -> int | None:
    """Load the stdin read chunk size in bytes, ``None`` when unset/invalid."""
    return _load_positive_int("chunk_size")


def load_max_chunks() -> int | None:
    """Load the stdin chunk-count ceiling, ``None`` when unset/invalid."""
    return _load_positive_int("max_chunks")
