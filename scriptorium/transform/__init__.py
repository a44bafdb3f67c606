"""Transformations from raw Notion records to domain trees."""

from .blocks import expand_list_items, fetch_block_tree, group_list_items, transform_blocks

__all__ = ["expand_list_items", "fetch_block_tree", "group_list_items", "transform_blocks"]
