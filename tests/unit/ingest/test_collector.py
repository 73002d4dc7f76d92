"""Tests for bounded stdin collection.

Covers EOF handling, the empty-input signal, read failures, and the
ceiling/truncation policy that drops a trailing partial record.
"""

from __future__ import annotations

import errno
import os
import unittest
from unittest import mock

from pipeview.ingest import IngestLimits, InputReadError, collect_input


class CollectInputTests(unittest.TestCase):
    def _pipe_with(self, data: bytes) -> int:
        read_fd, write_fd = os.pipe()
        os.write(write_fd, data)
        os.close(write_fd)
        self.addCleanup(os.close, read_fd)
        return read_fd

    def test_reads_until_eof(self) -> None:
        fd = self._pipe_with(b"/tmp/a.txt\n/tmp/b.txt\n")

        buffer = collect_input(fd)

        assert buffer is not None
        self.assertEqual(bytes(buffer.data), b"/tmp/a.txt\n/tmp/b.txt\n")
        self.assertEqual(buffer.used, 22)
        self.assertEqual(buffer.chunks, 1)
        self.assertFalse(buffer.truncated)

    def test_empty_input_returns_none(self) -> None:
        fd = self._pipe_with(b"")

        self.assertIsNone(collect_input(fd))

    def test_small_chunks_grow_buffer_across_reads(self) -> None:
        fd = self._pipe_with(b"abcdefghij")

        buffer = collect_input(fd, IngestLimits(chunk_size=4, max_chunks=8))

        assert buffer is not None
        self.assertEqual(bytes(buffer.data), b"abcdefghij")
        self.assertEqual(buffer.chunks, 3)
        self.assertFalse(buffer.truncated)

    def test_input_exactly_at_ceiling_is_not_truncated(self) -> None:
        fd = self._pipe_with(b"/a\n/bb\n/")

        buffer = collect_input(fd, IngestLimits(chunk_size=4, max_chunks=2))

        assert buffer is not None
        self.assertEqual(buffer.used, 8)
        self.assertFalse(buffer.truncated)
        self.assertEqual(buffer.complete_length(), 8)

    def test_input_past_ceiling_is_truncated_and_partial_record_dropped(self) -> None:
        fd = self._pipe_with(b"/a\n/bb\n/ccc\n")

        buffer = collect_input(fd, IngestLimits(chunk_size=4, max_chunks=2))

        assert buffer is not None
        self.assertTrue(buffer.truncated)
        self.assertEqual(buffer.used, 8)
        self.assertEqual(buffer.remaining, 0)
        self.assertEqual(bytes(buffer.data[: buffer.complete_length()]), b"/a\n/bb\n")

    def test_truncated_single_record_leaves_nothing_complete(self) -> None:
        fd = self._pipe_with(b"/very/long/path")

        buffer = collect_input(fd, IngestLimits(chunk_size=2, max_chunks=2))

        assert buffer is not None
        self.assertTrue(buffer.truncated)
        self.assertEqual(buffer.complete_length(), 0)

    def test_read_error_raises_input_read_error(self) -> None:
        failure = OSError(errno.EIO, os.strerror(errno.EIO))
        with mock.patch("pipeview.ingest.collector.os.read", side_effect=[b"/tmp/a\n", failure]):
            with self.assertRaises(InputReadError) as ctx:
                collect_input(0, IngestLimits(chunk_size=16, max_chunks=4))

        self.assertIn(os.strerror(errno.EIO), str(ctx.exception))
        self.assertIs(ctx.exception.__cause__, failure)


class IngestLimitsTests(unittest.TestCase):
    def test_default_ceiling_is_256_mib(self) -> None:
        self.assertEqual(IngestLimits().ceiling, 512 * 512 * 1024)

    def test_rejects_non_positive_values(self) -> None:
        with self.assertRaises(ValueError):
            IngestLimits(chunk_size=0)
        with self.assertRaises(ValueError):
            IngestLimits(max_chunks=0)


if __name__ == "__main__":
    unittest.main()
