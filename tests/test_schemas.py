"""
Unit tests for Notion property, page and block schemas.
"""

import unittest

from scriptorium.errors import SchemaValidationError
from scriptorium.models import (
    ChildPageBlock,
    CodeBlock,
    HeadingBlock,
    ImageBlock,
    MediaCategory,
    ParagraphBlock,
    ToggleBlock,
    VideoBlock,
)
from scriptorium.schemas import (
    PostProperties,
    is_allowed_image_url,
    transform_page_to_post,
    transform_page_to_post_list_item,
    transform_pages_to_media_items,
    transform_pages_to_post_list_items,
    validate_block,
)
from scriptorium.schemas.properties import TitleProperty

from notion_factories import IMAGE_URL, media_page, paragraph, post_page, rich_text, toggle


class TestProperties(unittest.TestCase):
    """Test property flattening."""

    def test_title_joins_plain_text(self):
        prop = TitleProperty.model_validate({
            "type": "title",
            "title": [{"plain_text": "Hello "}, {"plain_text": "World"}],
        })
        self.assertEqual(prop.value, "Hello World")

    def test_empty_title_is_none(self):
        prop = TitleProperty.model_validate({"type": "title", "title": []})
        self.assertIsNone(prop.value)

    def test_files_featured_image(self):
        page = post_page()
        page["properties"]["Featured image"] = {
            "type": "files",
            "files": [
                {"type": "external", "name": "cover", "external": {"url": IMAGE_URL}},
                {"type": "file", "name": "other", "file": {"url": IMAGE_URL + "?v=2"}},
            ],
        }
        item = transform_page_to_post_list_item(page)
        self.assertEqual(item.featured_image, IMAGE_URL)

    def test_image_allow_list(self):
        self.assertTrue(is_allowed_image_url(None))
        self.assertTrue(is_allowed_image_url(IMAGE_URL))
        self.assertTrue(is_allowed_image_url(
            "https://res.cloudinary.com/demo/image/fetch/https://example.com/a.jpg"
        ))
        self.assertFalse(is_allowed_image_url("https://example.com/mu/a.jpg"))
        self.assertFalse(is_allowed_image_url("https://res.cloudinary.com/demo/image/upload/a.jpg"))
        self.assertFalse(is_allowed_image_url("not a url"))

    def test_properties_use_notion_names(self):
        properties = PostProperties.model_validate(post_page()["properties"])
        self.assertEqual(properties.slug.value, "hello-world")
        self.assertEqual(properties.first_published.value, "2024-01-15")


class TestPostTransforms(unittest.TestCase):
    """Test page -> post transforms."""

    def test_post_list_item(self):
        item = transform_page_to_post_list_item(post_page(feed_id="https://example.com/feed/1"))

        self.assertEqual(item.id, "page-1")
        self.assertEqual(item.slug, "hello-world")
        self.assertEqual(item.title, "Hello World")
        self.assertEqual(item.description, "A first post")
        self.assertEqual(item.first_published, "2024-01-15")
        self.assertEqual(item.featured_image, IMAGE_URL)
        self.assertEqual(item.feed_id, "https://example.com/feed/1")

    def test_optional_fields(self):
        item = transform_page_to_post_list_item(post_page(description=None, featured_image=None))
        self.assertIsNone(item.description)
        self.assertIsNone(item.featured_image)
        self.assertIsNone(item.feed_id)

    def test_missing_slug_is_invalid(self):
        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError) as ctx:
                transform_page_to_post_list_item(post_page(slug=None))
        self.assertTrue(str(ctx.exception).startswith("Invalid post data"))
        self.assertTrue(any(issue.startswith("slug") for issue in ctx.exception.issues))

    def test_missing_property_is_invalid(self):
        page = post_page()
        del page["properties"]["Title"]

        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError) as ctx:
                transform_page_to_post_list_item(page)
        self.assertTrue(str(ctx.exception).startswith("Invalid post properties"))

    def test_off_allow_list_image_is_invalid(self):
        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError) as ctx:
                transform_page_to_post_list_item(post_page(featured_image="https://example.com/a.jpg"))
        self.assertIn("Featured image", str(ctx.exception))

    def test_missing_properties_is_invalid(self):
        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError):
                transform_page_to_post_list_item({"id": "page-1"})

    def test_list_fails_fast(self):
        pages = [post_page(), post_page(page_id="page-2", slug="second", first_published=None)]
        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError):
                transform_pages_to_post_list_items(pages)

    def test_post_details(self):
        post = transform_page_to_post(post_page())

        self.assertEqual(post.last_edited_time, "2024-02-01T10:00:00.000Z")
        self.assertEqual(post.blocks, [])
        self.assertIsNone(post.prev_post)
        self.assertIsNone(post.next_post)

    def test_post_details_require_last_edited_time(self):
        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError) as ctx:
                transform_page_to_post(post_page(last_edited_time=None))
        self.assertTrue(str(ctx.exception).startswith("Invalid post details data"))


class TestMediaTransforms(unittest.TestCase):
    """Test page -> media item transforms."""

    def test_media_items(self):
        items = transform_pages_to_media_items(
            [media_page(), media_page(page_id="media-2", title="Dune", apple_id=42, date="2023-12-31")],
            MediaCategory.BOOKS,
        )

        self.assertEqual([item.name for item in items], ["The Left Hand of Darkness", "Dune"])
        self.assertEqual(items[1].apple_id, 42)
        self.assertEqual(items[1].date, "2023-12-31")

    def test_invalid_item_names_category(self):
        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError) as ctx:
                transform_pages_to_media_items([media_page(apple_id=None)], MediaCategory.ALBUMS)
        self.assertTrue(str(ctx.exception).startswith("Invalid album data"))

    def test_invalid_properties_names_category(self):
        page = media_page()
        del page["properties"]["Date"]

        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError) as ctx:
                transform_pages_to_media_items([page], MediaCategory.PODCASTS)
        self.assertTrue(str(ctx.exception).startswith("Invalid podcast properties"))


class TestBlockValidation(unittest.TestCase):
    """Test raw block -> domain block validation."""

    def test_paragraph_with_formatting(self):
        block = validate_block({
            "type": "paragraph",
            "paragraph": {"rich_text": [
                rich_text("plain "),
                rich_text("bold link", link="https://example.com", bold=True),
            ]},
        })

        self.assertIsInstance(block, ParagraphBlock)
        self.assertEqual(block.rich_text[0].content, "plain ")
        self.assertFalse(block.rich_text[0].bold)
        self.assertEqual(block.rich_text[1].link, "https://example.com")
        self.assertTrue(block.rich_text[1].bold)

    def test_heading_levels(self):
        block = validate_block({"type": "heading_2", "heading_2": {"rich_text": [rich_text("Title")]}})
        self.assertIsInstance(block, HeadingBlock)
        self.assertEqual(block.level, 2)

    def test_code_block(self):
        block = validate_block({
            "type": "code",
            "code": {"rich_text": [rich_text("print(1)")], "language": "python", "caption": []},
        })
        self.assertIsInstance(block, CodeBlock)
        self.assertEqual(block.language, "python")
        self.assertIsNone(block.caption)

    def test_media_blocks(self):
        image = validate_block({
            "type": "image",
            "image": {"type": "external", "external": {"url": IMAGE_URL}, "caption": []},
        })
        video = validate_block({
            "type": "video",
            "video": {
                "type": "file",
                "file": {"url": "https://files.example.com/v.mp4", "expiry_time": "2024-01-01T00:00:00Z"},
                "caption": [rich_text("A clip")],
            },
        })

        self.assertIsInstance(image, ImageBlock)
        self.assertEqual(image.url, IMAGE_URL)
        self.assertIsInstance(video, VideoBlock)
        self.assertEqual(video.caption, "A clip")

    def test_child_page(self):
        block = validate_block({"type": "child_page", "child_page": {"title": "Appendix"}})
        self.assertIsInstance(block, ChildPageBlock)
        self.assertEqual(block.title, "Appendix")

    def test_toggle_children_are_validated(self):
        raw = toggle("More", "t-1")
        raw["children"] = [paragraph("Inside")]

        block = validate_block(raw)

        self.assertIsInstance(block, ToggleBlock)
        self.assertEqual(block.children[0].rich_text[0].content, "Inside")

    def test_unsupported_block_type(self):
        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError) as ctx:
                validate_block({"type": "table", "table": {"table_width": 2}})
        self.assertTrue(str(ctx.exception).startswith("Invalid block data"))

    def test_invalid_nested_child(self):
        raw = toggle("More", "t-1")
        raw["children"] = [{"type": "paragraph", "paragraph": {}}]

        with self.assertLogs(level="WARNING"):
            with self.assertRaises(SchemaValidationError):
                validate_block(raw)


if __name__ == "__main__":
    unittest.main()
