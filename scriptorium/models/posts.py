"""
Post models for Scriptorium.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .blocks import GroupedBlock


class PostListItem(BaseModel):
    """
    A published post as it appears in listings and prev/next navigation.
    """

    id: str = Field(..., min_length=1, description="Notion page id")
    slug: str = Field(..., min_length=1, description="URL slug, unique across all posts")
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    first_published: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}-\d{2}",
        description="ISO 8601 date or datetime of first publication"
    )
    featured_image: Optional[str] = Field(None, description="Featured image URL")
    feed_id: Optional[str] = Field(None, description="Feed entry id for syndicated posts")


class Post(PostListItem):
    """
    A single post with optional content and navigation.

    ``blocks``, ``prev_post`` and ``next_post`` are only populated when
    requested from the repository.
    """

    last_edited_time: str = Field(..., min_length=1)
    blocks: List[GroupedBlock] = Field(default_factory=list)
    prev_post: Optional[PostListItem] = None
    next_post: Optional[PostListItem] = None
