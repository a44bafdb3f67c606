"""Data models for Scriptorium."""

from .blocks import (
    Block,
    GroupedBlock,
    RichTextItem,
    ParagraphBlock,
    HeadingBlock,
    QuoteBlock,
    CodeBlock,
    ImageBlock,
    VideoBlock,
    ListItemBlock,
    ToggleBlock,
    ChildPageBlock,
    ListItem,
    ListBlock,
    GroupedToggleBlock,
)
from .posts import Post, PostListItem
from .media import MediaCategory, MediaItem

__all__ = [
    "Block",
    "GroupedBlock",
    "RichTextItem",
    "ParagraphBlock",
    "HeadingBlock",
    "QuoteBlock",
    "CodeBlock",
    "ImageBlock",
    "VideoBlock",
    "ListItemBlock",
    "ToggleBlock",
    "ChildPageBlock",
    "ListItem",
    "ListBlock",
    "GroupedToggleBlock",
    "Post",
    "PostListItem",
    "MediaCategory",
    "MediaItem",
]
