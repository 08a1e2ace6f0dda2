#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from vitrine.fetch import FetchProgress, RetryEvent
from vitrine.fetch.connectors.met import MetClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream Met collection objects for a search")
    p.add_argument("query", nargs="?", default="sunflowers")
    p.add_argument("limit", nargs="?", type=int, default=12)
    p.add_argument("--concurrency", type=int, default=6)
    p.add_argument("--department", type=int, default=None)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


def on_retry(event: RetryEvent) -> None:
    print(f"  retry {event.attempt} in {event.delay:.2f}s ({event.reason})")


def on_progress(progress: FetchProgress) -> None:
    print(f"  [{progress.completed}/{progress.total}] {progress.fraction:6.1%}", end="\r")


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    async with MetClient(on_retry=on_retry, concurrency=args.concurrency) as client:
        ids = await client.search(args.query, has_images=True, department_id=args.department)
        ids = ids[: args.limit]
        print("=" * 65)
        print(f"Query      : {args.query}")
        print(f"Objects    : {len(ids)}")
        print("=" * 65)

        async for obj in client.objects(ids, progress=on_progress):
            artist = obj.artist_display_name or "Unknown artist"
            print(f"{obj.object_id:>8} | {(obj.title or '')[:32]:32} | {artist[:20]}")
        print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
