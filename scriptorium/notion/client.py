"""
Async Notion API client for Scriptorium.

A thin wrapper over httpx that covers the two endpoints Scriptorium needs
and turns transport failures into TransientNetworkError, so the retry layer
can classify errors by type.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..errors import NotionAPIError, TransientNetworkError

NOTION_API_BASE = "https://api.notion.com/v1"
NOTION_VERSION = "2025-09-03"

# Status codes that mean "try again later" rather than "your request is wrong"
TRANSIENT_STATUS_CODES = {429, 502, 503, 504}


class NotionClient:
    """
    Minimal async client for Notion data source queries and block listings.
    """

    def __init__(
        self,
        token: str,
        base_url: str = NOTION_API_BASE,
        notion_version: str = NOTION_VERSION,
        timeout: float = 30.0,
        page_size: int = 100,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the Notion client.

        Args:
            token: Notion integration access token
            base_url: API base URL
            notion_version: Value sent in the Notion-Version header
            timeout: Per-request timeout in seconds
            page_size: Page size for paginated endpoints (Notion maximum is 100)
            http_client: Optional preconfigured httpx.AsyncClient (e.g. with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": notion_version,
            "Content-Type": "application/json",
        }
        self.client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Make an authenticated request and return the decoded JSON body.

        Raises:
            TransientNetworkError: Timeouts, dropped connections, rate limits, gateway errors
            NotionAPIError: Any other error response or an undecodable body
        """
        url = f"{self.base_url}{path}"

        try:
            response = await self.client.request(
                method, url, headers=self.headers, json=json, params=params
            )
        except httpx.TimeoutException as e:
            raise TransientNetworkError(f"Notion request timed out: {method} {path}: {e}") from e
        except (httpx.NetworkError, httpx.RemoteProtocolError) as e:
            raise TransientNetworkError(f"Notion connection failed: {method} {path}: {e}") from e

        if response.status_code in TRANSIENT_STATUS_CODES:
            raise TransientNetworkError(
                f"Notion returned {response.status_code} for {method} {path}",
                status_code=response.status_code
            )

        if response.is_error:
            code, message = None, response.text[:300]
            try:
                body = response.json()
                code = body.get("code")
                message = body.get("message", message)
            except ValueError:
                pass
            raise NotionAPIError(
                f"Notion request failed ({response.status_code} {code}): {message}",
                status_code=response.status_code,
                code=code
            )

        try:
            return response.json()
        except ValueError as e:
            raise NotionAPIError(f"Notion returned invalid JSON for {method} {path}") from e

    async def query_data_source(
        self,
        data_source_id: str,
        filter: Optional[Dict[str, Any]] = None,
        sorts: Optional[list] = None,
        start_cursor: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Query one page of rows from a data source.

        See https://developers.notion.com/reference/query-a-data-source
        """
        body: Dict[str, Any] = {"page_size": self.page_size}
        if filter:
            body["filter"] = filter
        if sorts:
            body["sorts"] = sorts
        if start_cursor:
            body["start_cursor"] = start_cursor

        logging.debug(f"Querying Notion data source {data_source_id} (cursor={start_cursor})")
        return await self._request("POST", f"/data_sources/{data_source_id}/query", json=body)

    async def list_block_children(
        self,
        block_id: str,
        start_cursor: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        List one page of a block's children.

        See https://developers.notion.com/reference/get-block-children
        """
        params: Dict[str, Any] = {"page_size": self.page_size}
        if start_cursor:
            params["start_cursor"] = start_cursor

        logging.debug(f"Listing children of Notion block {block_id} (cursor={start_cursor})")
        return await self._request("GET", f"/blocks/{block_id}/children", params=params)
