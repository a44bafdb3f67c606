"""
Cursor pagination for Notion list endpoints.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..schemas.properties import RawModel
from ..schemas.validation import validate_or_raise

INVALID_LIST_RESPONSE_ERROR = "Invalid list response"


class ListResponse(RawModel):
    """One page of a Notion list endpoint."""

    results: List[Dict[str, Any]]
    has_more: bool
    next_cursor: Optional[str] = None


async def collect_paginated(
    list_fn: Callable[..., Awaitable[Dict[str, Any]]],
    **kwargs: Any
) -> List[Dict[str, Any]]:
    """
    Call a paginated Notion endpoint until it reports no further pages.

    Args:
        list_fn: Coroutine accepting ``start_cursor`` plus kwargs and returning
            a Notion list response ``{"results", "has_more", "next_cursor"}``
        **kwargs: Passed through to every call

    Returns:
        The concatenated results of all pages

    Raises:
        SchemaValidationError: If a response is not a list envelope
    """
    results: List[Dict[str, Any]] = []
    start_cursor = None

    while True:
        response = validate_or_raise(
            ListResponse,
            await list_fn(start_cursor=start_cursor, **kwargs),
            "list response",
            INVALID_LIST_RESPONSE_ERROR
        )
        results.extend(response.results)

        if not response.has_more or not response.next_cursor:
            break
        start_cursor = response.next_cursor

    return results
