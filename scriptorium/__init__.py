"""
Scriptorium: content retrieval for a Notion-backed site.

Turns paginated, loosely-typed Notion records into validated posts, media
items and block trees, with retries, a development cache, and Result-based
error handling.
"""

__version__ = "0.1.0"
__author__ = "Scriptorium Project"

# Import main components
from .models import Post, PostListItem, MediaItem, MediaCategory, GroupedBlock
from .result import Ok, Err, Result, gather_results
from .cache import CacheAdapter, FilesystemCache, InMemoryCache
from .notion import NotionClient
from .repository import ContentRepository

__all__ = [
    "Post",
    "PostListItem",
    "MediaItem",
    "MediaCategory",
    "GroupedBlock",
    "Ok",
    "Err",
    "Result",
    "gather_results",
    "CacheAdapter",
    "FilesystemCache",
    "InMemoryCache",
    "NotionClient",
    "ContentRepository",
]
