"""
Media item models for Scriptorium.
"""

from enum import Enum

from pydantic import BaseModel, Field, PositiveInt


class MediaCategory(str, Enum):
    """Which upstream media data source to query."""

    BOOKS = "books"
    ALBUMS = "albums"
    PODCASTS = "podcasts"


class MediaItem(BaseModel):
    """
    A liked book, album or podcast, ready for iTunes enrichment.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    apple_id: PositiveInt = Field(..., description="Apple/iTunes catalogue id")
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
