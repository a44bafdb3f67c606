"""Orchestration of fetches, validation, caching and retries."""

from .content import ContentRepository, find_neighbors

__all__ = ["ContentRepository", "find_neighbors"]
