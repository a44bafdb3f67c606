"""
Notion property schemas.

Each schema validates the raw property structure returned by the Notion API
and exposes the flattened, ergonomic value through ``.value``:

    title / rich_text  -> joined plain text, or None when empty
    number             -> int | float | None
    date               -> start date string, or None
    url                -> URL string, or None
    files              -> list of URL strings
"""

from typing import Annotated, List, Literal, Optional, Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Featured images must come from the image CDN, from one of these folders
ALLOWED_IMAGE_HOSTS = ("res.cloudinary.com",)
ALLOWED_IMAGE_FOLDERS = ("/mu/", "/fetch/")


def is_url(value: str) -> bool:
    """True if the value parses as an absolute URL with a scheme and host."""
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_allowed_image_url(url: Optional[str]) -> bool:
    """
    Check a featured image URL against the image allow-list.

    None is allowed (posts without an image); anything else must be hosted on
    an allowed host and live in one of the allowed folders.
    """
    if url is None:
        return True
    if not url or not is_url(url):
        return False
    host = urlparse(url).hostname
    return host in ALLOWED_IMAGE_HOSTS and any(folder in url for folder in ALLOWED_IMAGE_FOLDERS)


class RawModel(BaseModel):
    """Base for raw Notion shapes: unknown keys are ignored, known keys are strict."""

    model_config = ConfigDict(extra="ignore")


class PlainTextItem(RawModel):
    plain_text: str


def join_plain_text(items: List[PlainTextItem]) -> Optional[str]:
    text = "".join(item.plain_text for item in items)
    return text or None


class TitleProperty(RawModel):
    type: Literal["title"]
    title: List[PlainTextItem]

    @property
    def value(self) -> Optional[str]:
        return join_plain_text(self.title)


class RichTextProperty(RawModel):
    type: Literal["rich_text"]
    rich_text: List[PlainTextItem]

    @property
    def value(self) -> Optional[str]:
        return join_plain_text(self.rich_text)


class NumberProperty(RawModel):
    type: Literal["number"]
    number: Optional[Union[int, float]]

    @property
    def value(self) -> Optional[Union[int, float]]:
        return self.number


class DateValue(RawModel):
    start: str


class DateProperty(RawModel):
    type: Literal["date"]
    date: Optional[DateValue]

    @property
    def value(self) -> Optional[str]:
        return self.date.start if self.date else None


class UrlProperty(RawModel):
    type: Literal["url"]
    url: Optional[str]

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not is_url(value):
            raise ValueError("must be a valid URL")
        return value

    @property
    def value(self) -> Optional[str]:
        return self.url


class FileUrl(RawModel):
    url: str

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not is_url(value):
            raise ValueError("must be a valid URL")
        return value


class ExternalFile(RawModel):
    type: Literal["external"]
    external: FileUrl

    @property
    def url(self) -> str:
        return self.external.url


class UploadedFile(RawModel):
    type: Literal["file"]
    file: FileUrl

    @property
    def url(self) -> str:
        return self.file.url


FileItem = Annotated[Union[ExternalFile, UploadedFile], Field(discriminator="type")]


class FilesProperty(RawModel):
    type: Literal["files"]
    files: List[FileItem]

    @property
    def value(self) -> List[str]:
        return [item.url for item in self.files]


# Some posts store the featured image as a URL property, others as files
FeaturedImageProperty = Annotated[Union[UrlProperty, FilesProperty], Field(discriminator="type")]


def featured_image_url(prop: Optional[Union[UrlProperty, FilesProperty]]) -> Optional[str]:
    """Resolve a featured image property to its first URL, or None."""
    if prop is None:
        return None
    if isinstance(prop, UrlProperty):
        return prop.value
    urls = prop.value
    return urls[0] if urls else None


class PostProperties(RawModel):
    """Properties of a page in the writing data source."""

    slug: RichTextProperty = Field(alias="Slug")
    title: TitleProperty = Field(alias="Title")
    description: RichTextProperty = Field(alias="Description")
    first_published: DateProperty = Field(alias="First published")
    featured_image: Optional[FeaturedImageProperty] = Field(alias="Featured image")
    feed_id: UrlProperty = Field(alias="Feed ID")

    @field_validator("featured_image")
    @classmethod
    def _check_image_host(cls, prop):
        if not is_allowed_image_url(featured_image_url(prop)):
            raise ValueError(
                'Featured image must be a Cloudinary URL in the "mu/" or "fetch/" folders'
            )
        return prop


class MediaProperties(RawModel):
    """Properties of a page in a books, albums or podcasts data source."""

    title: TitleProperty = Field(alias="Title")
    apple_id: NumberProperty = Field(alias="Apple ID")
    date: DateProperty = Field(alias="Date")
