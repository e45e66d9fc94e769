import json
import os
import sys
import tempfile
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from combiner.infrastructure.lookup_cache import FileLookupCache


class FileLookupCacheTests(unittest.TestCase):
    def test_set_then_get_round_trips_unicode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = FileLookupCache(tmp, ttl_seconds=60)
            cache.set("icon:Steam", {"icon": "♨️"})

            self.assertEqual({"icon": "♨️"}, cache.get("icon:Steam"))
            self.assertIsNone(cache.get("icon:Missing"))

    def test_expired_entries_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = FileLookupCache(tmp, ttl_seconds=10)
            with mock.patch("combiner.infrastructure.lookup_cache.time.time", return_value=1_000):
                cache.set("translations:Mud", {"es": "Barro"})
            with mock.patch("combiner.infrastructure.lookup_cache.time.time", return_value=1_011):
                self.assertIsNone(cache.get("translations:Mud"))
            with mock.patch("combiner.infrastructure.lookup_cache.time.time", return_value=1_005):
                self.assertEqual({"es": "Barro"}, cache.get("translations:Mud"))

    def test_no_ttl_keeps_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = FileLookupCache(tmp, ttl_seconds=None)
            with mock.patch("combiner.infrastructure.lookup_cache.time.time", return_value=0):
                cache.set("icon:Mud", {"icon": "💧"})
            self.assertEqual({"icon": "💧"}, cache.get("icon:Mud"))

    def test_data_version_change_clears_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp) / "lookups"
            FileLookupCache(root, data_version="1").set("icon:Steam", {"icon": "♨️"})

            same = FileLookupCache(root, data_version="1")
            self.assertEqual({"icon": "♨️"}, same.get("icon:Steam"))

            bumped = FileLookupCache(root, data_version="2")
            self.assertIsNone(bumped.get("icon:Steam"))
            manifest = json.loads((root / "manifest.json").read_text(encoding="utf-8"))
            self.assertEqual("2", manifest["data_version"])

    def test_data_version_defaults_from_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, mock.patch.dict(
            os.environ, {"COMBINER_LOOKUP_DATA_VERSION": "7"}, clear=False
        ):
            cache = FileLookupCache(Path(tmp) / "lookups")
            self.assertEqual("7", cache.data_version)

    def test_corrupt_entry_reads_as_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cache = FileLookupCache(tmp)
            cache.set("icon:Steam", {"icon": "♨️"})
            cache._entry_path("icon:Steam").write_text("{broken", encoding="utf-8")

            self.assertIsNone(cache.get("icon:Steam"))


if __name__ == "__main__":
    unittest.main()
