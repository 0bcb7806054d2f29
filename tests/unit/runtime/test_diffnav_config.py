"""JSON config loading and fallback to defaults."""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from diffnav.runtime import config as config_mod


class LoadConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "config.json"
        env_patch = mock.patch.dict(os.environ)
        env_patch.start()
        self.addCleanup(env_patch.stop)
        os.environ.pop(config_mod.CONFIG_DIR_ENV, None)
        path_patch = mock.patch.object(config_mod, "CONFIG_PATH", self.path)
        path_patch.start()
        self.addCleanup(path_patch.stop)

    def write(self, payload: object) -> None:
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(config_mod.load_config(), config_mod.DiffnavConfig())

    def test_values_are_read(self) -> None:
        self.write(
            {
                "hide_header": True,
                "file_tree_width": 32,
                "icons": "unicode",
                "side_by_side": False,
                "formatter": "my-delta",
                "log_file": "/tmp/diffnav.log",
            }
        )
        loaded = config_mod.load_config()
        self.assertTrue(loaded.hide_header)
        self.assertEqual(loaded.file_tree_width, 32)
        self.assertEqual(loaded.icons, "unicode")
        self.assertFalse(loaded.side_by_side)
        self.assertEqual(loaded.formatter, "my-delta")
        self.assertEqual(loaded.log_file, "/tmp/diffnav.log")

    def test_invalid_values_fall_back(self) -> None:
        self.write({"file_tree_width": -4, "search_tree_width": True, "icons": "emoji", "hide_footer": "yes"})
        loaded = config_mod.load_config()
        self.assertEqual(loaded.file_tree_width, config_mod.DEFAULT_FILE_TREE_WIDTH)
        self.assertEqual(loaded.search_tree_width, config_mod.DEFAULT_SEARCH_TREE_WIDTH)
        self.assertEqual(loaded.icons, "ascii")
        self.assertFalse(loaded.hide_footer)

    def test_malformed_json_is_ignored(self) -> None:
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("diffnav.runtime.config", level="WARNING"):
            self.assertEqual(config_mod.load_config_data(), {})

    def test_non_object_json_is_ignored(self) -> None:
        self.write([1, 2, 3])
        self.assertEqual(config_mod.load_config_data(), {})

    def test_config_dir_env_overrides_location(self) -> None:
        with tempfile.TemporaryDirectory() as other:
            (Path(other) / "config.json").write_text(json.dumps({"hide_tree_root": True}), encoding="utf-8")
            os.environ[config_mod.CONFIG_DIR_ENV] = other
            self.assertEqual(config_mod.config_path(), Path(other) / "config.json")
            self.assertTrue(config_mod.load_config().hide_tree_root)

    def test_config_dir_env_must_be_a_directory(self) -> None:
        os.environ[config_mod.CONFIG_DIR_ENV] = str(self.path.with_name("missing-dir"))
        self.assertEqual(config_mod.config_path(), self.path)


if __name__ == "__main__":
    unittest.main()
