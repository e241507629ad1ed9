"""Command-line entrypoint: sync a Notion database through the proxy and print it."""

import argparse
import asyncio
import sys

from adapters import get_gateway
from app_logging import get_logger, init_logging
from config import get_settings
from models.table import FilterOp
from sync import TableSync
from views import view_to_frame, visible_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Notion Table Sync")
    parser.add_argument("--proxy-url", help="Proxy base URL (default: NOTION_PROXY_URL)")
    parser.add_argument("--database-id", help="Database URL or id (default: NOTION_DATABASE_ID)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("sync", help="Sync and print the table")
    show.add_argument("--sort", default="", help="Sort option, e.g. Score:desc or created_time:asc")
    show.add_argument("--group", default="", help="Group by property")
    show.add_argument("--filter-key", default="", help="Filter on property")
    show.add_argument(
        "--filter-op",
        default=FilterOp.CONTAINS.value,
        choices=[op.value for op in FilterOp],
    )
    show.add_argument("--filter-value", default="")
    show.add_argument("--raw", action="store_true", help="Print decoded values without display formatting")

    edit = sub.add_parser("set", help="Sync, then write one cell")
    edit.add_argument("record_id")
    edit.add_argument("property")
    edit.add_argument("value")
    return parser


async def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    init_logging()
    logger = get_logger(__name__)

    settings = get_settings(proxy_url=args.proxy_url, database_id=args.database_id, timeout=args.timeout)
    table = TableSync(get_gateway("proxy", settings=settings), settings)

    if args.command == "sync":
        table.set_sort_option(args.sort)
        table.set_view(
            group_key=args.group,
            filter_key=args.filter_key,
            filter_op=FilterOp(args.filter_op),
            filter_value=args.filter_value,
        )

    if not await table.full_sync():
        logger.warning(f"sync failed: {table.state.error}")
        print(f"Error: {table.state.error}", file=sys.stderr)
        return 1

    if args.command == "set":
        if not await table.update_cell(args.record_id, args.property, args.value):
            print(f"Error: {table.state.error}", file=sys.stderr)
            return 1
        logger.info(f"Updated {args.property} on {args.record_id}")
        print(f"Updated {args.property} on {args.record_id}")
        return 0

    view = table.view()
    frame = view_to_frame(table.state.columns, view, formatted=not args.raw)
    print(frame.to_string() if not frame.empty else "(no rows)")
    summary = visible_summary(view, table.state.view)
    print(f"Last synced: {table.state.last_synced}" + (f" · {summary}" if summary else ""))
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
