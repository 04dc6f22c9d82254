"""
Command line entry point.

    rowsync last-indexed [index] [field]
    rowsync delete <index>
    rowsync index --index-name posts --query "SELECT * FROM posts WHERE id > {lastIndexedId}"
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from opensearchpy.exceptions import OpenSearchException
from pydantic import ValidationError

from rowsync.config.indexer.models import DEFAULT_BATCH_SIZE, DEFAULT_CURSOR_FIELD, IndexerConfig
from rowsync.config.logging import configure_logging, get_logger
from rowsync.errors import RowsyncError
from rowsync.repositories.opensearch.cursor_repository import resolve_last_cursor
from rowsync.resources.opensearch.client import close_opensearch_client
from rowsync.resources.opensearch.index_manager import delete_index
from rowsync.services.indexing.grouping import DEFAULT_DATE_FORMAT
from rowsync.services.indexing.indexer import Indexer

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rowsync", description="Sync database rows into search indices.")
    sub = parser.add_subparsers(dest="command", required=True)

    last = sub.add_parser("last-indexed", help="print the last indexed cursor value")
    last.add_argument("index", nargs="?", default="_all", help="index name or pattern to search")
    last.add_argument("field", nargs="?", default=DEFAULT_CURSOR_FIELD, help="field to sort by and return")

    delete = sub.add_parser("delete", help="delete an index")
    delete.add_argument("index", help="index to delete")

    run = sub.add_parser("index", help="run one indexing pass")
    run.add_argument("--index-name", required=True)
    run.add_argument("--query", required=True, help="SQL template, or a JSON filter with --collection")
    run.add_argument("--collection", default=None, help="MongoDB collection (switches to MongoDB)")
    run.add_argument("--batch-size", type=int, default=DEFAULT_BATCH_SIZE)
    run.add_argument("--cursor-field", default=DEFAULT_CURSOR_FIELD)
    run.add_argument("--reindex", action="store_true", help="delete destination indices first")
    run.add_argument("--mappings", type=Path, default=None, help="JSON file: field → property mapping")
    run.add_argument("--settings", type=Path, default=None, help="JSON file with index settings")
    run.add_argument("--explicit-mapping", action="store_true", help="index only fields in --mappings")
    run.add_argument("--group-by-date", metavar="FIELD", default=None)
    run.add_argument("--date-format", default=DEFAULT_DATE_FORMAT)
    return parser


def _read_json(path: Path | None) -> dict[str, Any]:
    if path is None:
        return {}
    return json.loads(path.read_text(encoding="utf-8"))


def config_from_args(args: argparse.Namespace) -> IndexerConfig:
    query: Any = args.query
    if args.collection:
        query = json.loads(args.query) if args.query.strip() else {}
    return IndexerConfig(
        query=query,
        collection=args.collection,
        index_name=args.index_name,
        batch_size=args.batch_size,
        cursor_field=args.cursor_field,
        explicit_mapping=args.explicit_mapping,
        reindex=args.reindex,
        mappings=_read_json(args.mappings),
        settings=_read_json(args.settings),
    )


async def _last_indexed(args: argparse.Namespace) -> int:
    value = await resolve_last_cursor(args.index, args.field)
    print(value)
    return 0


async def _delete(args: argparse.Namespace) -> int:
    acknowledged = await delete_index(args.index)
    print(json.dumps({"index": args.index, "acknowledged": acknowledged}))
    return 0


async def _index(args: argparse.Namespace) -> int:
    indexer = Indexer(config_from_args(args))
    if args.group_by_date:
        indexer.group_by_date(args.group_by_date, args.date_format)
    stats = await indexer.start()
    return 1 if stats.index_errors else 0


COMMANDS = {
    "last-indexed": _last_indexed,
    "delete": _delete,
    "index": _index,
}


async def _dispatch(args: argparse.Namespace) -> int:
    try:
        return await COMMANDS[args.command](args)
    finally:
        await close_opensearch_client()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    try:
        return asyncio.run(_dispatch(args))
    except (RowsyncError, OpenSearchException, ValidationError, ValueError, OSError) as e:
        logger.error("Command %s failed: %s", args.command, e, extra={"command": args.command, "error": str(e)})
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
