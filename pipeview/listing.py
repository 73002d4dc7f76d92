"""Render a link-farm directory as a short ANSI listing.

Each row shows a link name and the path it points at. Dangling links are
marked so missing sources stand out. Names come from arbitrary piped input,
so terminal control characters are escaped before display.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

RESET = "\033[0m"
LINK_NAME = "\033[1;36m"
LINK_DIR = "\033[1;34m"
LINK_TARGET = "\033[38;5;250m"
DANGLING = "\033[1;31m"
DIM = "\033[2m"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f\ud800-\udfff]")


@dataclass(frozen=True)
class ListingRow:
    """One directory child with its symlink target, if any."""

    name: str
    target: str | None
    is_dir: bool
    is_dangling: bool


def _escape_char(match: re.Match[str]) -> str:
    code = ord(match.group())
    # Undecodable filename bytes arrive as surrogate escapes (U+DC80..U+DCFF).
    if 0xDC80 <= code <= 0xDCFF:
        return f"\\x{code - 0xDC00:02x}"
    if code > 0xFF:
        return f"\\u{code:04x}"
    return f"\\x{code:02x}"


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes and lone surrogates so the text is safe to print."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(_escape_char, source)


def list_session_directory(directory: Path) -> list[ListingRow]:
    """Scan ``directory`` without following links; rows are sorted by name."""
    rows: list[ListingRow] = []
    with os.scandir(directory) as entries:
        for child in entries:
            target: str | None = None
            is_dangling = False
            if child.is_symlink():
                try:
                    target = os.readlink(child.path)
                except OSError:
                    target = None
                is_dangling = not os.path.exists(child.path)
            try:
                is_dir = child.is_dir()
            except OSError:
                is_dir = False
            rows.append(ListingRow(name=child.name, target=target, is_dir=is_dir, is_dangling=is_dangling))
    rows.sort(key=lambda row: (row.name.casefold(), row.name))
    return rows


def render_listing(directory: Path, rows: list[ListingRow], no_color: bool = False) -> str:
    """Return the listing text for ``rows``, one line per entry plus a header."""

    def paint(code: str, text: str) -> str:
        return text if no_color else f"{code}{text}{RESET}"

    out = [paint(DIM, f"{sanitize_terminal_text(str(directory))} ({len(rows)} entries)")]
    for row in rows:
        name = sanitize_terminal_text(row.name) + ("/" if row.is_dir else "")
        line = paint(LINK_DIR if row.is_dir else LINK_NAME, name)
        if row.target is not None:
            arrow_target = sanitize_terminal_text(row.target)
            line += " -> " + paint(DANGLING if row.is_dangling else LINK_TARGET, arrow_target)
            if row.is_dangling:
                line += paint(DANGLING, " [missing]")
        out.append(line)
    return "\n".join(out) + "\n"
