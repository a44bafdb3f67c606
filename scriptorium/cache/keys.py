"""
Cache key builders.

Keys are deterministic functions of a query's parameters, so identical
queries always read and overwrite the same entry.
"""


def _flag(value: bool) -> str:
    return "true" if value else "false"


def post_key(slug: str, include_blocks: bool, include_prev_and_next: bool) -> str:
    return f"post-{slug}-blocks-{_flag(include_blocks)}-nav-{_flag(include_prev_and_next)}"


def posts_list_key(sort_direction: str) -> str:
    return f"posts-list-{sort_direction}"


def media_key(category: str) -> str:
    return f"media-{category}"


def block_children_key(block_id: str) -> str:
    return f"blocks-{block_id}"

