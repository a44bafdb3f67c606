#!/usr/bin/env python3
"""
Scriptorium - Notion content retrieval

Developer entry point: fetches posts, media items or block trees through the
same repository the site uses and prints them as JSON.
"""

import asyncio
import json
import logging
import sys
import argparse
from pathlib import Path

from dotenv import load_dotenv

from scriptorium.config import config
from scriptorium.errors import ConfigurationError
from scriptorium.models import MediaCategory
from scriptorium.repository import ContentRepository


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Log to stderr so stdout stays valid JSON
    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def to_json(value) -> str:
    """Serialize a model, a list of models, or None."""
    if value is None:
        return "null"
    if isinstance(value, list):
        return json.dumps([item.model_dump(mode="json") for item in value], indent=2)
    return value.model_dump_json(indent=2)


async def run_command(args) -> int:
    """
    Run one subcommand against a repository built from configuration.

    Returns:
        Process exit code
    """
    repository = ContentRepository.from_config(config)

    try:
        if args.command == "posts":
            result = await repository.get_posts(sort_direction=args.direction, skip_cache=args.no_cache)
        elif args.command == "post":
            result = await repository.get_post(
                args.slug,
                include_blocks=args.blocks,
                include_prev_and_next=args.nav,
                skip_cache=args.no_cache
            )
        elif args.command == "media":
            result = await repository.get_media_items(MediaCategory(args.category), skip_cache=args.no_cache)
        else:
            result = await repository.get_block_children(args.block_id, skip_cache=args.no_cache)
    finally:
        await repository.aclose()

    if not result.ok:
        print(f"\nFetch failed: {result.error}", file=sys.stderr)
        return 1

    print(to_json(result.value))
    return 0


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Scriptorium - Notion content retrieval",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py posts                            # All published posts, oldest first
  python main.py posts --direction descending     # Newest first
  python main.py post my-slug --blocks --nav      # One post with content and navigation
  python main.py media books --no-cache           # Refresh the books cache
  python main.py blocks <page-id>                 # Grouped block tree of a page
        """
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Bypass cached results (fresh results are still cached)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Scriptorium 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    posts_parser = subparsers.add_parser("posts", help="List published posts")
    posts_parser.add_argument(
        "--direction",
        choices=["ascending", "descending"],
        default="ascending",
        help="Sort by first published date (default: ascending)"
    )

    post_parser = subparsers.add_parser("post", help="Fetch one post by slug")
    post_parser.add_argument("slug")
    post_parser.add_argument("--blocks", action="store_true", help="Include the post's blocks")
    post_parser.add_argument("--nav", action="store_true", help="Include previous/next posts")

    media_parser = subparsers.add_parser("media", help="List media items")
    media_parser.add_argument("category", choices=[c.value for c in MediaCategory])

    blocks_parser = subparsers.add_parser("blocks", help="Fetch a block tree")
    blocks_parser.add_argument("block_id")

    return parser.parse_args(argv)


def main():
    """Main entry point."""
    args = parse_arguments()

    load_dotenv()
    if args.config:
        config.config_path = Path(args.config)
    config.reload()
    setup_logging()

    try:
        exit_code = asyncio.run(run_command(args))
    except ConfigurationError as e:
        logging.error(f"Configuration error: {e}")
        print(f"\nConfiguration error: {e}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
