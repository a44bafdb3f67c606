"""
Page metadata schemas and page -> domain transforms.

A Notion page (a row of a data source) is validated in three steps: the
metadata outside ``properties``, then the properties themselves, then the
assembled domain object.
"""

from typing import Any, Iterable, List, Optional

from pydantic import Field

from ..models import MediaCategory, MediaItem, Post, PostListItem
from .properties import MediaProperties, PostProperties, RawModel, featured_image_url
from .validation import validate_or_raise

INVALID_POST_ERROR = "Invalid post data"
INVALID_POST_DETAILS_ERROR = "Invalid post details data"
INVALID_POST_PROPERTIES_ERROR = "Invalid post properties"

INVALID_MEDIA_ITEM_ERROR = {
    MediaCategory.BOOKS: "Invalid book data",
    MediaCategory.ALBUMS: "Invalid album data",
    MediaCategory.PODCASTS: "Invalid podcast data",
}

INVALID_MEDIA_PROPERTIES_ERROR = {
    MediaCategory.BOOKS: "Invalid book properties",
    MediaCategory.ALBUMS: "Invalid album properties",
    MediaCategory.PODCASTS: "Invalid podcast properties",
}


class PageMetadata(RawModel):
    """Fields of a Notion page outside its property bag."""

    id: str
    properties: Any = None
    last_edited_time: Optional[str] = None


class PostPageMetadata(PageMetadata):
    """Post pages must carry their last edit time."""

    last_edited_time: str = Field(..., min_length=1)


def _post_list_item_fields(page_id: str, properties: PostProperties) -> dict:
    return {
        "id": page_id,
        "slug": properties.slug.value,
        "title": properties.title.value,
        "description": properties.description.value,
        "first_published": properties.first_published.value,
        "featured_image": featured_image_url(properties.featured_image),
        "feed_id": properties.feed_id.value,
    }


def transform_page_to_post_list_item(page: Any) -> PostListItem:
    """
    Validate one Notion page and transform it to a PostListItem.

    Raises:
        SchemaValidationError: If any part of the page is invalid
    """
    metadata = validate_or_raise(PageMetadata, page, "page metadata", INVALID_POST_ERROR)
    properties = validate_or_raise(
        PostProperties, metadata.properties, "post properties", INVALID_POST_PROPERTIES_ERROR
    )
    return validate_or_raise(
        PostListItem,
        _post_list_item_fields(metadata.id, properties),
        "post",
        INVALID_POST_ERROR
    )


def transform_pages_to_post_list_items(pages: Iterable[Any]) -> List[PostListItem]:
    """Transform every page, failing on the first invalid one."""
    return [transform_page_to_post_list_item(page) for page in pages]


def transform_page_to_post(page: Any) -> Post:
    """
    Validate one Notion page and transform it to a Post.

    The returned post has no blocks and no navigation; the repository fills
    those in when they are requested.

    Raises:
        SchemaValidationError: If any part of the page is invalid
    """
    metadata = validate_or_raise(
        PostPageMetadata, page, "page metadata", INVALID_POST_DETAILS_ERROR
    )
    properties = validate_or_raise(
        PostProperties, metadata.properties, "post properties", INVALID_POST_PROPERTIES_ERROR
    )
    fields = _post_list_item_fields(metadata.id, properties)
    fields["last_edited_time"] = metadata.last_edited_time
    return validate_or_raise(Post, fields, "post details", INVALID_POST_DETAILS_ERROR)


def transform_pages_to_media_items(pages: Iterable[Any], category: MediaCategory) -> List[MediaItem]:
    """
    Validate Notion pages from a media data source and transform them.

    Raises:
        SchemaValidationError: On the first invalid page
    """
    category = MediaCategory(category)
    items = []
    for page in pages:
        metadata = validate_or_raise(
            PageMetadata, page, "page metadata", INVALID_MEDIA_ITEM_ERROR[category]
        )
        properties = validate_or_raise(
            MediaProperties,
            metadata.properties,
            f"{category.value} item properties",
            INVALID_MEDIA_PROPERTIES_ERROR[category]
        )
        items.append(validate_or_raise(
            MediaItem,
            {
                "id": metadata.id,
                "name": properties.title.value,
                "apple_id": properties.apple_id.value,
                "date": properties.date.value,
            },
            f"{category.value} item",
            INVALID_MEDIA_ITEM_ERROR[category]
        ))
    return items
