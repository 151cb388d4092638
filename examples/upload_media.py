#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from laakhay.social import ClientConfig, SocialClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Chunked media upload, then post it")
    p.add_argument("path", type=Path)
    p.add_argument("text", nargs="?", default=None, help="Post text (skips posting if omitted)")
    p.add_argument("--chunk-size", type=int, default=None, help="Segment size in bytes")
    p.add_argument("--category", default=None, help="e.g. tweet_video, tweet_image")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    async with SocialClient(ClientConfig.from_env()) as client:
        media_id = await client.upload_file(
            args.path, category=args.category, chunk_size=args.chunk_size
        )
        print(f"Media id   : {media_id}")
        if args.text is not None:
            created = await client.fetch("create_tweet", text=args.text, media_ids=[media_id])
            print(f"Post id    : {created.first()['id']}")


if __name__ == "__main__":
    asyncio.run(main())
