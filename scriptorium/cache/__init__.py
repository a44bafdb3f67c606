"""Pluggable, development-only caching."""

from .base import CacheAdapter, DEFAULT_NAMESPACE
from .filesystem import CacheEntry, FilesystemCache, sanitize_cache_key
from .memory import InMemoryCache

__all__ = [
    "CacheAdapter",
    "DEFAULT_NAMESPACE",
    "CacheEntry",
    "FilesystemCache",
    "InMemoryCache",
    "sanitize_cache_key",
]
