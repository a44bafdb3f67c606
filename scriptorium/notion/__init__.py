"""Notion API access."""

from .client import NotionClient, NOTION_API_BASE, NOTION_VERSION
from .pagination import collect_paginated

__all__ = ["NotionClient", "NOTION_API_BASE", "NOTION_VERSION", "collect_paginated"]
