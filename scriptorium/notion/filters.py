"""
Server-side filters and sorts for Notion data source queries.
"""

from datetime import datetime
from typing import Any, Dict, List


def published_posts_filter(now: datetime) -> Dict[str, Any]:
    """Posts destined for the blog, published, titled, slugged and not scheduled."""
    return {
        "and": [
            {"property": "Destination", "multi_select": {"contains": "blog"}},
            {"property": "Status", "status": {"equals": "Published"}},
            {"property": "Title", "title": {"is_not_empty": True}},
            {"property": "Slug", "rich_text": {"is_not_empty": True}},
            {"property": "First published", "date": {"on_or_before": now.isoformat()}},
        ]
    }


def post_by_slug_filter(slug: str) -> Dict[str, Any]:
    return {"and": [{"property": "Slug", "rich_text": {"equals": slug}}]}


def media_items_filter(now: datetime) -> Dict[str, Any]:
    """Items with a title, an Apple ID, and a date that is not in the future."""
    return {
        "and": [
            {"property": "Title", "title": {"is_not_empty": True}},
            {"property": "Apple ID", "number": {"is_not_empty": True}},
            {"property": "Date", "date": {"on_or_before": now.isoformat()}},
        ]
    }


def sort_by(property_name: str, direction: str) -> List[Dict[str, str]]:
    if direction not in ("ascending", "descending"):
        raise ValueError(f"Unknown sort direction: {direction}")
    return [{"property": property_name, "direction": direction}]
