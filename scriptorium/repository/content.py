"""
Content repository for Scriptorium.

Orchestrates cache, retry, Notion client, schema validation and the block
transformer behind four operations. Every operation returns a Result; no
exception escapes to the caller.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from ..cache import CacheAdapter, FilesystemCache
from ..cache import keys
from ..config import ConfigManager, DataSourceIds
from ..errors import invariant
from ..models import GroupedBlock, MediaCategory, MediaItem, Post, PostListItem
from ..notion import NotionClient, collect_paginated
from ..notion import filters
from ..result import Ok, Result, to_err
from ..retry import RetryOptions, with_retry
from ..schemas import (
    transform_page_to_post,
    transform_pages_to_media_items,
    transform_pages_to_post_list_items,
)
from ..schemas.validation import format_validation_error
from ..transform import fetch_block_tree, transform_blocks

post_list_adapter = TypeAdapter(List[PostListItem])
media_list_adapter = TypeAdapter(List[MediaItem])
block_list_adapter = TypeAdapter(List[GroupedBlock])
post_adapter = TypeAdapter(Post)


def find_neighbors(posts: List[PostListItem], slug: str):
    """
    Find the posts immediately before and after a slug in an ordered list.

    Returns:
        (prev_post, next_post); either is None at the ends of the list or
        when the slug is not in the list
    """
    slugs = [post.slug for post in posts]
    if slug not in slugs:
        return None, None

    index = slugs.index(slug)
    prev_post = posts[index - 1] if index > 0 else None
    next_post = posts[index + 1] if index < len(posts) - 1 else None
    return prev_post, next_post


class ContentRepository:
    """
    Fetches posts, media items and block trees from Notion.

    All collaborators are injected, so tests can pass fakes and several
    independently configured repositories can coexist in one process.
    """

    def __init__(
        self,
        client: NotionClient,
        cache: CacheAdapter,
        data_sources: DataSourceIds,
        retry_options: Optional[RetryOptions] = None,
        cache_namespace: str = "notion",
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the repository.

        Args:
            client: Notion client (anything with query_data_source and list_block_children)
            cache: Cache adapter; pass a disabled adapter to turn caching off
            data_sources: Data source ids for writing and media collections
            retry_options: Backoff settings for network calls
            cache_namespace: Namespace all entries are stored under
            clock: Returns the current time, used for "published before now" filters
        """
        self.client = client
        self.cache = cache
        self.data_sources = data_sources
        self.retry_options = retry_options or RetryOptions()
        self.cache_namespace = cache_namespace
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def from_config(cls, config: ConfigManager) -> "ContentRepository":
        """
        Build a repository from configuration.

        Raises:
            ConfigurationError: If Notion settings are incomplete
        """
        settings = config.notion_settings()
        client = NotionClient(
            token=settings.access_token,
            base_url=settings.api_base_url,
            notion_version=settings.version,
            timeout=settings.timeout,
            page_size=settings.page_size,
        )
        cache = FilesystemCache(root=config.cache_directory, enabled=config.cache_enabled)
        retry = config.retry_settings
        return cls(
            client=client,
            cache=cache,
            data_sources=settings.data_sources,
            retry_options=RetryOptions(
                max_attempts=retry.get("max_attempts", 3),
                initial_delay_ms=retry.get("initial_delay_ms", 2000),
                max_delay_ms=retry.get("max_delay_ms", 10000),
                backoff_multiplier=retry.get("backoff_multiplier", 2),
            ),
            cache_namespace=config.cache_namespace,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _read_cache(self, key: str, adapter: TypeAdapter):
        """
        Read and validate a cached value.

        Cached data that no longer matches the domain model is treated as a
        miss, so it is refetched and overwritten.
        """
        cached = await self.cache.get(key, self.cache_namespace)
        if cached is None:
            return None

        try:
            return adapter.validate_python(cached)
        except ValidationError as e:
            logging.warning(
                f"Ignoring invalid cache entry {key} ({', '.join(format_validation_error(e))})"
            )
            return None

    async def _write_cache(self, key: str, adapter: TypeAdapter, value: Any) -> None:
        await self.cache.set(key, adapter.dump_python(value, mode="json"), self.cache_namespace)

    def _retry_options(self, description: str) -> RetryOptions:
        """Copy the configured retry options with a logging observer for one call site."""
        opts = self.retry_options

        def on_retry(error: Exception, attempt: int, delay_ms: int) -> None:
            logging.warning(
                f"Notion API error fetching {description} - retrying "
                f"(attempt {attempt}/{opts.max_attempts} after {delay_ms}ms): {error}"
            )
            if opts.on_retry:
                opts.on_retry(error, attempt, delay_ms)

        return RetryOptions(
            max_attempts=opts.max_attempts,
            initial_delay_ms=opts.initial_delay_ms,
            max_delay_ms=opts.max_delay_ms,
            backoff_multiplier=opts.backoff_multiplier,
            on_retry=on_retry,
            sleep=opts.sleep,
        )

    async def get_post(
        self,
        slug: Optional[str],
        include_blocks: bool = False,
        include_prev_and_next: bool = False,
        skip_cache: bool = False
    ) -> Result:
        """
        Fetch one post by slug.

        Args:
            slug: The post slug; None or empty returns Ok(None)
            include_blocks: Also fetch and transform the post's block tree
            include_prev_and_next: Also find the neighbouring posts by publish date
            skip_cache: Bypass the cache read (the result is still written)

        Returns:
            Ok(Post), Ok(None) when no post has this slug, or Err
        """
        try:
            if not slug:
                return Ok(None)

            cache_key = keys.post_key(slug, include_blocks, include_prev_and_next)
            if not skip_cache:
                cached = await self._read_cache(cache_key, post_adapter)
                if cached is not None:
                    return Ok(cached)

            logging.info(f"Fetching post from Notion API: {slug}")

            pages = await with_retry(
                lambda: collect_paginated(
                    self.client.query_data_source,
                    data_source_id=self.data_sources.writing,
                    filter=filters.post_by_slug_filter(slug),
                ),
                self._retry_options(f'post "{slug}"'),
            )

            if not pages:
                logging.warning(f"No post found for slug: {slug}")
                return Ok(None)

            invariant(
                len(pages) == 1,
                f"Multiple posts found for slug: {slug}",
                {"slug": slug, "ids": [page.get("id") for page in pages]}
            )

            post = transform_page_to_post(pages[0])

            if include_prev_and_next:
                posts_result = await self.get_posts(sort_direction="ascending", skip_cache=skip_cache)
                if not posts_result.ok:
                    return posts_result
                prev_post, next_post = find_neighbors(posts_result.value, slug)
                post = post.model_copy(update={"prev_post": prev_post, "next_post": next_post})

            if include_blocks:
                blocks_result = await self.get_block_children(post.id, skip_cache=skip_cache)
                if not blocks_result.ok:
                    return blocks_result
                post = post.model_copy(update={"blocks": blocks_result.value})

            await self._write_cache(cache_key, post_adapter, post)
            return Ok(post)

        except Exception as e:
            return to_err(e, "get_post")

    async def get_posts(self, sort_direction: str = "ascending", skip_cache: bool = False) -> Result:
        """
        Fetch all published blog posts, sorted by first publish date.

        Args:
            sort_direction: "ascending" or "descending"
            skip_cache: Bypass the cache read (the result is still written)

        Returns:
            Ok(list of PostListItem) or Err
        """
        try:
            cache_key = keys.posts_list_key(sort_direction)
            if not skip_cache:
                cached = await self._read_cache(cache_key, post_list_adapter)
                if cached is not None:
                    return Ok(cached)

            logging.info("Fetching posts from Notion API")

            sorts = filters.sort_by("First published", sort_direction)
            pages = await with_retry(
                lambda: collect_paginated(
                    self.client.query_data_source,
                    data_source_id=self.data_sources.writing,
                    filter=filters.published_posts_filter(self.clock()),
                    sorts=sorts,
                ),
                self._retry_options("posts"),
            )

            posts = transform_pages_to_post_list_items(pages)

            slugs = [post.slug for post in posts]
            duplicates = sorted({s for s in slugs if slugs.count(s) > 1})
            invariant(not duplicates, "Post slugs must be unique", {"duplicates": duplicates})

            await self._write_cache(cache_key, post_list_adapter, posts)
            return Ok(posts)

        except Exception as e:
            return to_err(e, "get_posts")

    async def get_media_items(self, category: MediaCategory, skip_cache: bool = False) -> Result:
        """
        Fetch liked books, albums or podcasts.

        Only items with a title, an Apple ID and a date that is not in the
        future are returned, newest first.

        Returns:
            Ok(list of MediaItem) or Err
        """
        operation = f"get_media_items ({getattr(category, 'value', category)})"
        try:
            category = MediaCategory(category)
            operation = f"get_media_items ({category.value})"

            cache_key = keys.media_key(category.value)
            if not skip_cache:
                cached = await self._read_cache(cache_key, media_list_adapter)
                if cached is not None:
                    return Ok(cached)

            logging.info(f"Fetching {category.value} from Notion API")

            data_source_id = getattr(self.data_sources, category.value)
            pages = await with_retry(
                lambda: collect_paginated(
                    self.client.query_data_source,
                    data_source_id=data_source_id,
                    filter=filters.media_items_filter(self.clock()),
                    sorts=filters.sort_by("Date", "descending"),
                ),
                self._retry_options(category.value),
            )

            items = transform_pages_to_media_items(pages, category)

            await self._write_cache(cache_key, media_list_adapter, items)
            return Ok(items)

        except Exception as e:
            return to_err(e, operation)

    async def get_block_children(self, block_id: str, skip_cache: bool = False) -> Result:
        """
        Fetch a page's (or block's) full block tree, validated and grouped.

        Returns:
            Ok(list of GroupedBlock) or Err
        """
        try:
            cache_key = keys.block_children_key(block_id)
            if not skip_cache:
                cached = await self._read_cache(cache_key, block_list_adapter)
                if cached is not None:
                    return Ok(cached)

            logging.info(f"Fetching block children from Notion API: {block_id}")

            raw_blocks = await with_retry(
                lambda: fetch_block_tree(self.client.list_block_children, block_id),
                self._retry_options("block children"),
            )

            blocks = transform_blocks(raw_blocks)

            await self._write_cache(cache_key, block_list_adapter, blocks)
            return Ok(blocks)

        except Exception as e:
            return to_err(e, "get_block_children")
