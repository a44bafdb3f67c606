"""
Notion block schemas.

Raw block records are validated against a discriminated union of the block
kinds Scriptorium understands and converted to domain ``Block`` models. Any
unknown block type or malformed payload is rejected.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from ..models import (
    Block,
    ChildPageBlock,
    CodeBlock,
    HeadingBlock,
    ImageBlock,
    ListItemBlock,
    ParagraphBlock,
    QuoteBlock,
    RichTextItem,
    ToggleBlock,
    VideoBlock,
)
from .properties import FileUrl, RawModel
from .validation import validate_or_raise

INVALID_BLOCK_ERROR = "Invalid block data"


class RawLink(RawModel):
    url: str


class RawTextContent(RawModel):
    content: str
    link: Optional[RawLink] = None


class RawAnnotations(RawModel):
    bold: bool
    italic: bool
    strikethrough: bool
    underline: bool
    code: bool


class RawRichText(RawModel):
    type: Literal["text"]
    text: RawTextContent
    annotations: RawAnnotations

    def to_domain(self) -> RichTextItem:
        return RichTextItem(
            content=self.text.content,
            link=self.text.link.url if self.text.link else None,
            bold=self.annotations.bold,
            italic=self.annotations.italic,
            strikethrough=self.annotations.strikethrough,
            underline=self.annotations.underline,
            code=self.annotations.code,
        )


def _rich_text(items: List[RawRichText]) -> List[RichTextItem]:
    return [item.to_domain() for item in items]


def _caption(items: List[RawRichText]) -> Optional[str]:
    return "".join(item.text.content for item in items) if items else None


class RawRichTextContent(RawModel):
    rich_text: List[RawRichText]


class RawParagraph(RawModel):
    type: Literal["paragraph"]
    paragraph: RawRichTextContent

    def to_block(self) -> Block:
        return ParagraphBlock(rich_text=_rich_text(self.paragraph.rich_text))


class RawHeading1(RawModel):
    type: Literal["heading_1"]
    heading_1: RawRichTextContent

    def to_block(self) -> Block:
        return HeadingBlock(type="heading_1", rich_text=_rich_text(self.heading_1.rich_text))


class RawHeading2(RawModel):
    type: Literal["heading_2"]
    heading_2: RawRichTextContent

    def to_block(self) -> Block:
        return HeadingBlock(type="heading_2", rich_text=_rich_text(self.heading_2.rich_text))


class RawHeading3(RawModel):
    type: Literal["heading_3"]
    heading_3: RawRichTextContent

    def to_block(self) -> Block:
        return HeadingBlock(type="heading_3", rich_text=_rich_text(self.heading_3.rich_text))


class RawQuote(RawModel):
    type: Literal["quote"]
    quote: RawRichTextContent

    def to_block(self) -> Block:
        return QuoteBlock(rich_text=_rich_text(self.quote.rich_text))


class RawCodeContent(RawModel):
    rich_text: List[RawRichText]
    language: str
    caption: List[RawRichText]


class RawCode(RawModel):
    type: Literal["code"]
    code: RawCodeContent

    def to_block(self) -> Block:
        return CodeBlock(
            rich_text=_rich_text(self.code.rich_text),
            language=self.code.language,
            caption=_caption(self.code.caption),
        )


class RawExternalMedia(RawModel):
    type: Literal["external"]
    external: FileUrl
    caption: List[RawRichText] = Field(default_factory=list)

    @property
    def url(self) -> str:
        return self.external.url


class RawUploadedMedia(RawModel):
    type: Literal["file"]
    file: FileUrl
    caption: List[RawRichText] = Field(default_factory=list)

    @property
    def url(self) -> str:
        return self.file.url


RawMedia = Annotated[Union[RawExternalMedia, RawUploadedMedia], Field(discriminator="type")]


class RawImage(RawModel):
    type: Literal["image"]
    image: RawMedia

    def to_block(self) -> Block:
        return ImageBlock(url=self.image.url)


class RawVideo(RawModel):
    type: Literal["video"]
    video: RawMedia

    def to_block(self) -> Block:
        return VideoBlock(url=self.video.url, caption=_caption(self.video.caption))


class RawBulletedListItem(RawModel):
    type: Literal["bulleted_list_item"]
    bulleted_list_item: RawRichTextContent

    def to_block(self) -> Block:
        return ListItemBlock(
            type="bulleted_list_item",
            rich_text=_rich_text(self.bulleted_list_item.rich_text)
        )


class RawNumberedListItem(RawModel):
    type: Literal["numbered_list_item"]
    numbered_list_item: RawRichTextContent

    def to_block(self) -> Block:
        return ListItemBlock(
            type="numbered_list_item",
            rich_text=_rich_text(self.numbered_list_item.rich_text)
        )


class RawToggle(RawModel):
    type: Literal["toggle"]
    toggle: RawRichTextContent
    # Children are validated one at a time by validate_block
    children: List[Any] = Field(default_factory=list)

    def to_block(self) -> Block:
        return ToggleBlock(
            rich_text=_rich_text(self.toggle.rich_text),
            children=[validate_block(child) for child in self.children],
        )


class RawChildPageContent(RawModel):
    title: str


class RawChildPage(RawModel):
    type: Literal["child_page"]
    child_page: RawChildPageContent

    def to_block(self) -> Block:
        return ChildPageBlock(title=self.child_page.title)


RawBlock = Annotated[
    Union[
        RawParagraph,
        RawHeading1,
        RawHeading2,
        RawHeading3,
        RawQuote,
        RawCode,
        RawImage,
        RawVideo,
        RawBulletedListItem,
        RawNumberedListItem,
        RawToggle,
        RawChildPage,
    ],
    Field(discriminator="type"),
]

raw_block_adapter = TypeAdapter(RawBlock)

# Block types that may carry nested children worth fetching
CONTAINER_BLOCK_TYPES = {"toggle"}


def validate_block(block: Any) -> Block:
    """
    Validate one raw Notion block and convert it to a domain Block.

    Toggle children are validated recursively.

    Raises:
        SchemaValidationError: If the block, or any nested child, is invalid
    """
    raw = validate_or_raise(raw_block_adapter, block, "block", INVALID_BLOCK_ERROR)
    return raw.to_block()
