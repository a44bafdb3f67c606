"""Schemas validating raw Notion records at the API boundary."""

from .validation import format_validation_error, log_validation_error, validate_or_raise
from .properties import (
    PostProperties,
    MediaProperties,
    featured_image_url,
    is_allowed_image_url,
)
from .pages import (
    PageMetadata,
    PostPageMetadata,
    transform_page_to_post,
    transform_page_to_post_list_item,
    transform_pages_to_post_list_items,
    transform_pages_to_media_items,
)
from .blocks import CONTAINER_BLOCK_TYPES, validate_block

__all__ = [
    "format_validation_error",
    "log_validation_error",
    "validate_or_raise",
    "PostProperties",
    "MediaProperties",
    "featured_image_url",
    "is_allowed_image_url",
    "PageMetadata",
    "PostPageMetadata",
    "transform_page_to_post",
    "transform_page_to_post_list_item",
    "transform_pages_to_post_list_items",
    "transform_pages_to_media_items",
    "CONTAINER_BLOCK_TYPES",
    "validate_block",
]
