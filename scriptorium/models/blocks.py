"""
Block models for Scriptorium.

These are the ergonomic domain shapes produced from raw Notion blocks.
``Block`` is one validated block; ``GroupedBlock`` is what renderers consume,
with consecutive list items merged into a single list aggregate.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class RichTextItem(BaseModel):
    """A run of text with uniform formatting."""

    content: str = Field(..., description="The text content")
    link: Optional[str] = Field(None, description="Link URL, if the text is linked")
    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    rich_text: List[RichTextItem] = Field(default_factory=list)


class HeadingBlock(BaseModel):
    type: Literal["heading_1", "heading_2", "heading_3"]
    rich_text: List[RichTextItem] = Field(default_factory=list)

    @property
    def level(self) -> int:
        """Heading level, 1 to 3."""
        return int(self.type[-1])


class QuoteBlock(BaseModel):
    type: Literal["quote"] = "quote"
    rich_text: List[RichTextItem] = Field(default_factory=list)


class CodeBlock(BaseModel):
    type: Literal["code"] = "code"
    rich_text: List[RichTextItem] = Field(default_factory=list)
    language: str = Field(..., description="Language name as reported by Notion")
    caption: Optional[str] = Field(None, description="Caption text, or None when empty")


class ImageBlock(BaseModel):
    type: Literal["image"] = "image"
    url: str


class VideoBlock(BaseModel):
    type: Literal["video"] = "video"
    url: str
    caption: Optional[str] = None


class ListItemBlock(BaseModel):
    """A single bulleted or numbered list item, before grouping."""

    type: Literal["bulleted_list_item", "numbered_list_item"]
    rich_text: List[RichTextItem] = Field(default_factory=list)


class ToggleBlock(BaseModel):
    """A collapsible container whose children are ungrouped blocks."""

    type: Literal["toggle"] = "toggle"
    rich_text: List[RichTextItem] = Field(default_factory=list)
    children: List["Block"] = Field(default_factory=list)


class ChildPageBlock(BaseModel):
    type: Literal["child_page"] = "child_page"
    title: str


class ListItem(BaseModel):
    rich_text: List[RichTextItem] = Field(default_factory=list)


class ListBlock(BaseModel):
    """A maximal run of same-kind list items merged into one block."""

    type: Literal["bulleted_list", "numbered_list"]
    items: List[ListItem] = Field(default_factory=list)


class GroupedToggleBlock(BaseModel):
    """A toggle whose children have had their list items grouped."""

    type: Literal["toggle"] = "toggle"
    rich_text: List[RichTextItem] = Field(default_factory=list)
    children: List["GroupedBlock"] = Field(default_factory=list)


Block = Annotated[
    Union[
        ParagraphBlock,
        HeadingBlock,
        QuoteBlock,
        CodeBlock,
        ImageBlock,
        VideoBlock,
        ListItemBlock,
        ToggleBlock,
        ChildPageBlock,
    ],
    Field(discriminator="type"),
]

GroupedBlock = Annotated[
    Union[
        ParagraphBlock,
        HeadingBlock,
        QuoteBlock,
        CodeBlock,
        ImageBlock,
        VideoBlock,
        ListBlock,
        GroupedToggleBlock,
        ChildPageBlock,
    ],
    Field(discriminator="type"),
]

# List item type -> aggregate list type
LIST_KINDS = {
    "bulleted_list_item": "bulleted_list",
    "numbered_list_item": "numbered_list",
}

# Enable forward references for the self-referencing containers
ToggleBlock.model_rebuild()
GroupedToggleBlock.model_rebuild()
