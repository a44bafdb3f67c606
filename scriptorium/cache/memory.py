"""
In-memory cache backing, mainly for tests and short-lived processes.
"""

import json
from typing import Any, Dict, Optional, Tuple

from .base import CacheAdapter


class InMemoryCache(CacheAdapter):
    """
    Dict-backed cache adapter.

    Values are stored as JSON text, so reads return fresh copies and
    non-serializable values fail on write exactly as they would on disk.
    """

    def __init__(self, enabled: bool = True):
        super().__init__(enabled=enabled)
        self._entries: Dict[Tuple[str, str], str] = {}

    async def _read(self, key: str, namespace: str) -> Optional[Any]:
        stored = self._entries.get((namespace, key))
        return json.loads(stored) if stored is not None else None

    async def _write(self, key: str, value: Any, namespace: str) -> None:
        self._entries[(namespace, key)] = json.dumps(value)

    def clear(self) -> None:
        self._entries.clear()
