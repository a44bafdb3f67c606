"""
Block tree transformation.

Turns a sequence of raw Notion blocks into the grouped tree renderers use:

1. Validate every block. The first invalid block fails the whole batch, so a
   partial document is never produced.
2. Group consecutive list items of the same kind into one list block.
   Toggles are grouped recursively, independently per nesting level.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from ..models import (
    Block,
    GroupedBlock,
    GroupedToggleBlock,
    ListBlock,
    ListItem,
    ListItemBlock,
    ToggleBlock,
)
from ..models.blocks import LIST_KINDS
from ..notion.pagination import collect_paginated
from ..schemas.blocks import CONTAINER_BLOCK_TYPES, validate_block


def group_list_items(blocks: Sequence[Block]) -> List[GroupedBlock]:
    """
    Group consecutive list items into list blocks.

    [item, item, paragraph, item] -> [list(2 items), paragraph, list(1 item)]

    Run boundaries are exactly the maximal stretches of one list kind; every
    other block is passed through in order. Toggle children are grouped
    the same way.
    """
    grouped: List[GroupedBlock] = []
    run: Optional[ListBlock] = None

    for block in blocks:
        if isinstance(block, ListItemBlock):
            kind = LIST_KINDS[block.type]
            if run is None or run.type != kind:
                run = ListBlock(type=kind)
                grouped.append(run)
            run.items.append(ListItem(rich_text=block.rich_text))
            continue

        run = None
        if isinstance(block, ToggleBlock):
            grouped.append(GroupedToggleBlock(
                rich_text=block.rich_text,
                children=group_list_items(block.children),
            ))
        else:
            grouped.append(block)

    return grouped


def expand_list_items(blocks: Sequence[GroupedBlock]) -> List[Block]:
    """
    Undo group_list_items: split list blocks back into individual items.
    """
    expanded: List[Block] = []
    for block in blocks:
        if isinstance(block, ListBlock):
            item_type = f"{block.type}_item"
            expanded.extend(
                ListItemBlock(type=item_type, rich_text=item.rich_text) for item in block.items
            )
        elif isinstance(block, GroupedToggleBlock):
            expanded.append(ToggleBlock(
                rich_text=block.rich_text,
                children=expand_list_items(block.children),
            ))
        else:
            expanded.append(block)
    return expanded


def transform_blocks(raw_blocks: Sequence[Any]) -> List[GroupedBlock]:
    """
    Validate raw blocks and group their list items.

    Raises:
        SchemaValidationError: If any block at any depth is invalid
    """
    blocks = [validate_block(block) for block in raw_blocks]
    return group_list_items(blocks)


ListChildren = Callable[..., Awaitable[Dict[str, Any]]]


async def fetch_block_tree(list_children: ListChildren, block_id: str) -> List[Dict[str, Any]]:
    """
    Fetch every child of a block, following pagination and nested containers.

    Container blocks that report ``has_children`` get their own children
    fetched and attached under a ``children`` key, depth first. Fetches are
    sequential.

    Args:
        list_children: Paginated listing call, e.g. NotionClient.list_block_children
        block_id: The page or block whose children to fetch

    Returns:
        Raw block dicts, ready for transform_blocks
    """
    children = await collect_paginated(list_children, block_id=block_id)

    for child in children:
        if child.get("has_children") and child.get("type") in CONTAINER_BLOCK_TYPES:
            logging.debug(f"Fetching nested children of {child.get('type')} block {child.get('id')}")
            child["children"] = await fetch_block_tree(list_children, child["id"])

    return children
