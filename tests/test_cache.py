"""
Unit tests for the development cache adapters.
"""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from scriptorium.cache import FilesystemCache, InMemoryCache, sanitize_cache_key
from scriptorium.cache import keys
from scriptorium.errors import CacheReadError


class TestCacheKeys(unittest.TestCase):
    """Test deterministic key construction."""

    def test_post_key(self):
        self.assertEqual(keys.post_key("hello", True, False), "post-hello-blocks-true-nav-false")
        self.assertEqual(keys.post_key("hello", False, True), "post-hello-blocks-false-nav-true")

    def test_other_keys(self):
        self.assertEqual(keys.posts_list_key("descending"), "posts-list-descending")
        self.assertEqual(keys.media_key("books"), "media-books")
        self.assertEqual(keys.block_children_key("abc"), "blocks-abc")

    def test_sanitize_cache_key(self):
        self.assertEqual(sanitize_cache_key('a/b\\c:d*e?f"g<h>i|j'), "a-b-c-d-e-f-g-h-i-j")
        self.assertEqual(sanitize_cache_key("post-hello-world"), "post-hello-world")


class TestFilesystemCache(unittest.IsolatedAsyncioTestCase):
    """Test the JSON file backing."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.cache = FilesystemCache(root=self.temp_dir, enabled=True)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    async def test_round_trip(self):
        await self.cache.set("posts-list-ascending", [{"slug": "a"}], "notion")
        self.assertEqual(await self.cache.get("posts-list-ascending", "notion"), [{"slug": "a"}])

    async def test_file_layout(self):
        await self.cache.set("post/with:colon", {"x": 1}, "notion")

        file_path = Path(self.temp_dir) / "notion" / "post-with-colon.json"
        self.assertTrue(file_path.exists())
        with open(file_path, 'r', encoding='utf-8') as f:
            entry = json.load(f)
        self.assertEqual(entry["data"], {"x": 1})
        self.assertIn("cached_at", entry)

    async def test_namespaces_are_separate(self):
        await self.cache.set("key", "one", "first")
        await self.cache.set("key", "two", "second")
        self.assertEqual(await self.cache.get("key", "first"), "one")
        self.assertEqual(await self.cache.get("key", "second"), "two")

    async def test_miss(self):
        self.assertIsNone(await self.cache.get("missing", "notion"))

    async def test_disabled_cache_never_reads_or_writes(self):
        disabled = FilesystemCache(root=self.temp_dir, enabled=False)
        await disabled.set("key", "value", "notion")

        self.assertFalse((Path(self.temp_dir) / "notion").exists())

        await self.cache.set("key", "value", "notion")
        self.assertIsNone(await disabled.get("key", "notion"))

    async def test_corrupt_entry_is_a_miss(self):
        file_path = self.cache.path_for("broken", "notion")
        file_path.parent.mkdir(parents=True)
        file_path.write_text("{not json", encoding="utf-8")

        with self.assertLogs(level="WARNING"):
            self.assertIsNone(await self.cache.get("broken", "notion"))

    async def test_wrong_structure_is_a_miss(self):
        file_path = self.cache.path_for("odd", "notion")
        file_path.parent.mkdir(parents=True)
        file_path.write_text(json.dumps({"unexpected": True}), encoding="utf-8")

        with self.assertLogs(level="WARNING"):
            self.assertIsNone(await self.cache.get("odd", "notion"))

    async def test_undecodable_entry_is_a_miss(self):
        file_path = self.cache.path_for("binary", "notion")
        file_path.parent.mkdir(parents=True)
        file_path.write_bytes(b'\xff\xfe{"cached_at": "x", "data": 1}')

        with self.assertLogs(level="WARNING"):
            self.assertIsNone(await self.cache.get("binary", "notion"))

    async def test_overwrite_with_shorter_entry(self):
        await self.cache.set("key", {"items": list(range(200))}, "notion")
        await self.cache.set("key", {"items": [1]}, "notion")

        self.assertEqual(await self.cache.get("key", "notion"), {"items": [1]})
        leftovers = [p.name for p in (Path(self.temp_dir) / "notion").iterdir()]
        self.assertEqual(leftovers, ["key.json"])

    async def test_unexpected_read_error_raises(self):
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with self.assertRaises(CacheReadError):
                await self.cache.get("key", "notion")

    async def test_write_failure_is_swallowed(self):
        # A file where the namespace directory should be makes mkdir fail
        blocker = Path(self.temp_dir) / "notion"
        blocker.write_text("", encoding="utf-8")

        with self.assertLogs(level="WARNING") as logs:
            await self.cache.set("key", {"x": 1}, "notion")

        self.assertTrue(any("Failed to cache" in line for line in logs.output))
        self.assertTrue(os.path.isfile(blocker))

    async def test_unserializable_value_is_swallowed(self):
        with self.assertLogs(level="WARNING"):
            await self.cache.set("key", {"x": object()}, "notion")
        self.assertIsNone(await self.cache.get("key", "notion"))


class TestInMemoryCache(unittest.IsolatedAsyncioTestCase):
    """Test the dict backing."""

    async def test_round_trip_returns_copies(self):
        cache = InMemoryCache()
        value = {"items": [1, 2]}
        await cache.set("key", value)
        value["items"].append(3)

        self.assertEqual(await cache.get("key"), {"items": [1, 2]})

    async def test_disabled(self):
        cache = InMemoryCache(enabled=False)
        await cache.set("key", "value")
        self.assertIsNone(await cache.get("key"))

    async def test_clear(self):
        cache = InMemoryCache()
        await cache.set("key", "value", "notion")
        cache.clear()
        self.assertIsNone(await cache.get("key", "notion"))


if __name__ == "__main__":
    unittest.main()
