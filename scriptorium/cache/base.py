"""
Cache adapter interface for Scriptorium.

The repository only ever talks to a CacheAdapter, so filesystem, in-memory
or external key-value backings can be swapped without touching it.

The cache is a local development convenience. A disabled adapter always
misses and never writes, so it cannot change production behaviour.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

DEFAULT_NAMESPACE = "default"


class CacheAdapter(ABC):
    """
    Abstract base class for cache backings.

    Subclasses implement ``_read`` and ``_write``; this class handles the
    enabled check and makes sure write failures never reach the caller.
    """

    def __init__(self, enabled: bool = True):
        """
        Initialize the adapter.

        Args:
            enabled: When False, get always returns None and set does nothing
        """
        self.enabled = enabled

    async def get(self, key: str, namespace: str = DEFAULT_NAMESPACE) -> Optional[Any]:
        """
        Get a value from the cache.

        Returns:
            The cached value, or None on a miss, a corrupt entry, or when disabled

        Raises:
            CacheReadError: If the backing store fails for a reason other than a miss
        """
        if not self.enabled:
            return None

        value = await self._read(key, namespace)
        if value is not None:
            logging.info(f"Cache hit: {namespace}/{key}")
        return value

    async def set(self, key: str, value: Any, namespace: str = DEFAULT_NAMESPACE) -> None:
        """
        Store a JSON-serializable value. Never raises.
        """
        if not self.enabled:
            return

        try:
            await self._write(key, value, namespace)
            logging.info(f"Cached: {namespace}/{key}")
        except Exception as e:
            logging.warning(f"Failed to cache {namespace}/{key}: {e}")

    @abstractmethod
    async def _read(self, key: str, namespace: str) -> Optional[Any]:
        """Read a stored value, or None if absent or invalid."""
        pass

    @abstractmethod
    async def _write(self, key: str, value: Any, namespace: str) -> None:
        """Persist a value, overwriting any previous entry."""
        pass
