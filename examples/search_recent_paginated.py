#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from laakhay.social import ClientConfig, SocialClient


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Walk recent search results page by page")
    p.add_argument("query", nargs="?", default="python -is:retweet")
    p.add_argument("pages", nargs="?", type=int, default=3)
    p.add_argument("per_page", nargs="?", type=int, default=10)
    p.add_argument("--verbose", action="store_true", help="Show pagination log events")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    async with SocialClient(ClientConfig.from_env()) as client:
        print("=" * 65)
        print(f"Query      : {args.query}")
        print("=" * 65)
        async for page in client.paginate(
            "search_recent",
            query=args.query,
            max_results=args.per_page,
            tweet_fields="created_at,author_id",
            max_pages=args.pages,
        ):
            for tweet in page.data:
                text = tweet["text"].replace("\n", " ")
                print(f"{tweet.get('created_at', ''):25} | {tweet['id']:>20} | {text[:60]}")
            for error in page.errors:
                print(f"  partial error: {error.describe()}")
            print(f"-- next token: {page.next_token}")
        print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
