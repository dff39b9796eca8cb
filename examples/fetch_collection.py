#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from wedata.fetch import (
    CollectionFetcher,
    CollectionSearch,
    ConnectionSettings,
    FetchConfig,
    FetchMode,
    InMemorySink,
)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fetch a collection into memory and show a sample")
    p.add_argument("url")
    p.add_argument("collection")
    p.add_argument("token")
    p.add_argument("--page-size", type=int, default=1000)
    p.add_argument("--concurrency", type=int, default=4)
    p.add_argument("--sequential", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    settings = ConnectionSettings(url=args.url, collection=args.collection, token=args.token)
    config = FetchConfig(
        page_size=args.page_size,
        concurrency=args.concurrency,
        mode=FetchMode.from_flag(args.sequential),
    )
    sink = InMemorySink()

    async with CollectionSearch(settings) as search:
        summary = await CollectionFetcher(config).fetch(search, sink)

    for document in sink.documents[:5]:
        print(document)
    print(summary.summary_line())


if __name__ == "__main__":
    asyncio.run(main())
