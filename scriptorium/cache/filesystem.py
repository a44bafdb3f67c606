"""
Filesystem cache backing.

Each entry is one JSON file, ``<root>/<namespace>/<sanitized key>.json``,
holding ``{"cached_at": ..., "data": ...}``. There is no expiry; entries are
overwritten by the next successful fetch.
"""

import asyncio
import json
import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from ..errors import CacheReadError
from .base import CacheAdapter

DEFAULT_CACHE_DIR = ".local-cache"

_UNSAFE_KEY_CHARS = re.compile(r'[/\\:*?"<>|]')


def sanitize_cache_key(key: str) -> str:
    """Replace characters that are unsafe in filenames with hyphens."""
    return _UNSAFE_KEY_CHARS.sub("-", key)


class CacheEntry(BaseModel):
    """The on-disk structure of one cache file."""

    cached_at: str
    data: Any


class FilesystemCache(CacheAdapter):
    """
    Cache adapter storing JSON files under a local directory.
    """

    def __init__(self, root: str = DEFAULT_CACHE_DIR, enabled: bool = True):
        """
        Initialize the filesystem cache.

        Args:
            root: Directory holding one subdirectory per namespace
            enabled: Whether the cache is active (development mode only)
        """
        super().__init__(enabled=enabled)
        self.root = Path(root)

    def path_for(self, key: str, namespace: str) -> Path:
        return self.root / namespace / f"{sanitize_cache_key(key)}.json"

    async def _read(self, key: str, namespace: str) -> Optional[Any]:
        return await asyncio.to_thread(self._read_sync, key, namespace)

    async def _write(self, key: str, value: Any, namespace: str) -> None:
        await asyncio.to_thread(self._write_sync, key, value, namespace)

    def _read_sync(self, key: str, namespace: str) -> Optional[Any]:
        file_path = self.path_for(key, namespace)

        try:
            with open(file_path, 'rb') as f:
                contents = f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheReadError(f"Cache read error for {namespace}/{key}: {e}") from e

        try:
            entry = CacheEntry.model_validate(json.loads(contents.decode('utf-8')))
        except (UnicodeDecodeError, ValueError, ValidationError) as e:
            logging.warning(f"Invalid cache file for {namespace}/{key}, ignoring it: {e}")
            return None

        return entry.data

    def _write_sync(self, key: str, value: Any, namespace: str) -> None:
        file_path = self.path_for(key, namespace)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        entry = CacheEntry(cached_at=datetime.now(timezone.utc).isoformat(), data=value)
        payload = entry.model_dump_json(indent=2)

        # Each writer replaces the whole file; the last writer wins
        fd, temp_path = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
            os.replace(temp_path, file_path)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise
