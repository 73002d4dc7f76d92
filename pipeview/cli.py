"""Command-line front door for pipeview.

Parses CLI options and, when stdin is a pipe, turns the piped path list into
an ephemeral link-farm directory. Then hands the terminal to an interactive
command running inside that directory, removing the directory afterwards.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from functools import partial
from pathlib import Path

from .config import load_chunk_size, load_list_eagerly, load_max_chunks, load_tmp_root
from .ingest import IngestError, IngestLimits, IngestStatus, SessionContext, ingest_paths
from .ingest.types import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_CHUNKS
from .listing import list_session_directory, render_listing
from .shell import launch_command
from .terminal import reattach_stdin_to_tty, stdin_is_interactive

logger = logging.getLogger("pipeview")


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _configure_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("pipeview: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pipeview",
        description="Browse a piped list of paths as one directory of symlinks.",
    )
    parser.add_argument("--tmp-root", type=Path, default=None, help="Directory under which the session directory is created.")
    parser.add_argument(
        "--list",
        dest="list_eagerly",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print the session directory listing after switching to it.",
    )
    parser.add_argument("--command", default=None, help="Command to run in the session directory (default: $SHELL).")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument(
        "--max-chunks",
        type=_positive_int,
        default=None,
        help=f"Read at most this many stdin chunks (default: {DEFAULT_MAX_CHUNKS}).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each ingestion step to stderr.")
    return parser


def print_listing(directory: Path, no_color: bool) -> None:
    """Write the session directory listing to stdout."""
    try:
        rows = list_session_directory(directory)
    except OSError as exc:
        logger.warning("cannot list %s: %s", directory, exc.strerror or exc)
        return
    text = render_listing(directory, rows, no_color=no_color)
    encoding = getattr(sys.stdout, "encoding", None) or "utf-8"
    sys.stdout.write(text.encode(encoding, "backslashreplace").decode(encoding))
    sys.stdout.flush()


def _resolve_limits(max_chunks: int | None) -> IngestLimits:
    return IngestLimits(
        chunk_size=load_chunk_size() or DEFAULT_CHUNK_SIZE,
        max_chunks=max_chunks or load_max_chunks() or DEFAULT_MAX_CHUNKS,
    )


def main(argv: list[str] | None = None, stdin_fd: int = 0, stdout_fd: int = 1) -> int:
    """Parse CLI arguments, ingest piped paths, and run the interactive command.

    ``stdin_fd``/``stdout_fd`` are primarily for tests. Returns the exit status
    of the launched command. A fatal ingestion error is reported and the
    command still starts in the original working directory.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    no_color = args.no_color or not os.isatty(stdout_fd)
    list_eagerly = args.list_eagerly if args.list_eagerly is not None else load_list_eagerly()
    context = SessionContext(
        working_dir=Path.cwd(),
        tmp_root=args.tmp_root if args.tmp_root is not None else load_tmp_root(),
        list_eagerly=list_eagerly,
        refresh_listing=partial(print_listing, no_color=no_color),
    )

    with context:
        if not stdin_is_interactive(stdin_fd):
            try:
                result = ingest_paths(context, stdin_fd, _resolve_limits(args.max_chunks))
            except IngestError as exc:
                logger.error("%s", exc)
            else:
                if result.status is IngestStatus.EMPTY:
                    logger.debug("no paths on standard input")
                elif result.failed:
                    logger.warning("%d of %d path(s) could not be linked", result.failed, result.created + result.failed)
            finally:
                if not reattach_stdin_to_tty(stdin_fd, stdout_fd):
                    logger.debug("no controlling terminal to re-attach stdin to")
        status = launch_command(context.working_dir, args.command)
        if context.active_session is not None:
            # Leave the directory before it is removed.
            context.change_dir(context.active_session.origin_working_dir)
    return status


if __name__ == "__main__":
    raise SystemExit(main())
