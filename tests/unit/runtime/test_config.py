from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pipeview import config


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.config_path = Path(tmp.name) / "pipeview" / "config.json"
        patcher = mock.patch("pipeview.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _write_config(self, data: object) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(data), encoding="utf-8")

    def test_missing_or_malformed_config_falls_back_to_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self._write_config(["not an object"])
        self.assertEqual(config.load_config(), {})
        self.config_path.write_text("{broken", encoding="utf-8")
        self.assertEqual(config.load_config(), {})
        self.assertTrue(config.load_list_eagerly())
        self.assertIsNone(config.load_chunk_size())

    def test_tmp_root_prefers_config_then_environment(self) -> None:
        with mock.patch.dict("pipeview.config.os.environ", {}, clear=True):
            self.assertEqual(config.load_tmp_root(), Path("/tmp"))
        with mock.patch.dict("pipeview.config.os.environ", {"TMPDIR": "/var/tmp"}, clear=True):
            self.assertEqual(config.load_tmp_root(), Path("/var/tmp"))
        with mock.patch.dict(
            "pipeview.config.os.environ",
            {"TMPDIR": "/var/tmp", "PIPEVIEW_TMPDIR": "/scratch"},
            clear=True,
        ):
            self.assertEqual(config.load_tmp_root(), Path("/scratch"))

            self._write_config({"tmp_root": "/from/config"})
            self.assertEqual(config.load_tmp_root(), Path("/from/config"))

    def test_list_eagerly_accepts_only_booleans(self) -> None:
        self._write_config({"list_eagerly": False})
        self.assertFalse(config.load_list_eagerly())
        self._write_config({"list_eagerly": "no"})
        self.assertTrue(config.load_list_eagerly())

    def test_read_limits_accept_only_positive_integers(self) -> None:
        self._write_config({"chunk_size": 4096, "max_chunks": True})
        self.assertEqual(config.load_chunk_size(), 4096)
        self.assertIsNone(config.load_max_chunks())
        self._write_config({"chunk_size": -1, "max_chunks": 3})
        self.assertIsNone(config.load_chunk_size())
        self.assertEqual(config.load_max_chunks(), 3)


if __name__ == "__main__":
    unittest.main()
