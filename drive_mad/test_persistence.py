import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from drive_mad import config
from drive_mad.persistence import JsonHighScoreStore, MemoryHighScoreStore


class TestJsonHighScoreStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.path = self.dir / "nested" / "highscore.json"
        self.store = JsonHighScoreStore(self.path)

    def tearDown(self):
        self._tmp.cleanup()

    def _write_raw(self, text):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")

    def test_missing_file_reads_zero(self):
        self.assertEqual(self.store.read_high_score(), 0)

    def test_write_then_read(self):
        self.store.write_high_score(128)
        self.assertEqual(self.store.read_high_score(), 128)
        self.assertEqual(json.loads(self.path.read_text()), {"high_score": 128})
        self.assertFalse(self.path.with_suffix(".json.tmp").exists())

    def test_survives_new_instance(self):
        self.store.write_high_score(77)
        self.assertEqual(JsonHighScoreStore(self.path).read_high_score(), 77)

    def test_overwrite(self):
        self.store.write_high_score(5)
        self.store.write_high_score(9)
        self.assertEqual(self.store.read_high_score(), 9)

    def test_garbage_file_reads_zero(self):
        self._write_raw("{not json")
        self.assertEqual(self.store.read_high_score(), 0)

    def test_non_numeric_reads_zero(self):
        for raw in ('{"high_score": "abc"}', '{"high_score": null}', '{"high_score": true}',
                    '{"high_score": -4}', '{"high_score": [1]}', '{}'):
            with self.subTest(raw=raw):
                self._write_raw(raw)
                self.assertEqual(self.store.read_high_score(), 0)

    def test_bare_number_and_numeric_string(self):
        self._write_raw("42")
        self.assertEqual(self.store.read_high_score(), 42)
        self._write_raw('{"high_score": "19"}')
        self.assertEqual(self.store.read_high_score(), 19)

    def test_failed_write_is_swallowed(self):
        blocker = self.dir / "file"
        blocker.write_text("x")
        store = JsonHighScoreStore(blocker / "highscore.json")
        store.write_high_score(10)
        self.assertEqual(store.read_high_score(), 0)

    def test_default_path_from_environment(self):
        with mock.patch.dict(os.environ, {"DRIVE_MAD_HOME": str(self.dir)}):
            store = JsonHighScoreStore()
        self.assertEqual(store.path, self.dir / config.HIGH_SCORE_FILENAME)


class TestMemoryHighScoreStore(unittest.TestCase):

    def test_records_writes(self):
        store = MemoryHighScoreStore(3)
        store.write_high_score(8)
        self.assertEqual(store.read_high_score(), 8)
        self.assertEqual(store.writes, [8])

    def test_bad_initial_value(self):
        self.assertEqual(MemoryHighScoreStore(None).read_high_score(), 0)
        self.assertEqual(MemoryHighScoreStore("1e400").read_high_score(), 0)


class TestConfig(unittest.TestCase):

    def test_log_level_default(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(config.log_level(), "INFO")

    def test_log_level_override(self):
        with mock.patch.dict(os.environ, {"DRIVE_MAD_LOG_LEVEL": "debug"}):
            self.assertEqual(config.log_level(), "DEBUG")

    def test_autopilot_flag(self):
        with mock.patch.dict(os.environ, {"DRIVE_MAD_AUTOPILOT": "1"}):
            self.assertTrue(config.autopilot_enabled())
        with mock.patch.dict(os.environ, {"DRIVE_MAD_AUTOPILOT": "no"}):
            self.assertFalse(config.autopilot_enabled())


if __name__ == "__main__":
    unittest.main()
