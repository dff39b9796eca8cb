"""Command-line interface for fetching a collection.

Usage:
    # Fetch a collection and save it to a file
    wedata-fetch save -u https://db-myproject.example.io -c movies -t <token> -f movies.json

    # Fetch a collection and print it on the terminal
    wedata-fetch print -u https://db-myproject.example.io -c movies -t <token>

    # Fetch page by page instead of in parallel (large collections)
    wedata-fetch save -u db-myproject.example.io -c movies -t <token> -f movies.json --sequential
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from . import __version__
from .api import CollectionFetcher, FetchSummary, build_sink
from .core import Command, FetchMode
from .runtime.paging import DEFAULT_PAGE_SIZE, FetchConfig
from .runtime.rest import ConnectionSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _common_options() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "-c", "--collection", required=True, help="Collection to be fetched, e.g. 'movies'"
    )
    parser.add_argument("-t", "--token", required=True, help="Authentication token")
    parser.add_argument(
        "-u", "--url", required=True, help="The data service URL, e.g. 'db-myproject.example.io'"
    )
    parser.add_argument(
        "-s",
        "--sequential",
        action="store_true",
        help="Fetch the pages one after another instead of in parallel. "
        "Useful when fetching data from large collections",
    )
    parser.add_argument(
        "--page-size",
        type=_positive_int,
        default=DEFAULT_PAGE_SIZE,
        help=f"Records requested per page (default: {DEFAULT_PAGE_SIZE})",
    )
    parser.add_argument(
        "--concurrency",
        type=_positive_int,
        default=None,
        help="Maximum pages in flight in parallel mode (default: all)",
    )
    parser.add_argument(
        "--order-by", default="id", help="Stable field the collection is sorted by (default: id)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def build_parser() -> argparse.ArgumentParser:
    common = _common_options()
    parser = argparse.ArgumentParser(
        prog="wedata-fetch",
        description="Fetch all records of a collection from the data service.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="<cmd>")
    subparsers.required = True

    save = subparsers.add_parser(
        Command.SAVE.value,
        parents=[common],
        help="Fetch and save data in a collection to a file",
    )
    output = save.add_mutually_exclusive_group(required=True)
    output.add_argument(
        "-f", "--file", dest="file", help="File where fetched data is stored, e.g. 'movies.json'"
    )
    output.add_argument("-o", "--output", dest="file", help="Alias for --file")
    save.add_argument(
        "--atomic",
        action="store_true",
        help="Write to a temporary file and move it into place only on success",
    )

    subparsers.add_parser(
        Command.PRINT.value,
        parents=[common],
        help="Fetch and print data in a collection to the terminal",
    )
    return parser


async def run(args: argparse.Namespace) -> FetchSummary:
    """Fetch the collection described by parsed arguments."""
    command = Command(args.command)
    config = FetchConfig(
        page_size=args.page_size,
        concurrency=args.concurrency,
        mode=FetchMode.from_flag(args.sequential),
    )
    settings = ConnectionSettings(
        url=args.url,
        collection=args.collection,
        token=args.token,
        order_by=args.order_by,
    )
    sink = build_sink(command, getattr(args, "file", None), atomic=getattr(args, "atomic", False))
    return await CollectionFetcher(config).fetch_collection(settings, sink, command=command)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT, stream=sys.stderr)

    try:
        summary = asyncio.run(run(args))
    except KeyboardInterrupt:
        print("ERROR interrupted", file=sys.stderr)
        return 130
    except Exception as e:
        logger.debug("Fetch failed", exc_info=True)
        print(f"ERROR {e}", file=sys.stderr)
        return 1

    print(summary.summary_line())
    return 0


if __name__ == "__main__":
    sys.exit(main())
