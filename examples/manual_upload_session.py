#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import mimetypes
from pathlib import Path

from laakhay.social import ClientConfig, MediaCategory, SocialClient, TransportError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Drive INIT/APPEND/FINALIZE by hand, re-sending segments on transport errors"
    )
    p.add_argument("path", type=Path)
    p.add_argument("--chunk-size", type=int, default=1024 * 1024)
    p.add_argument("--attempts", type=int, default=3, help="Attempts per segment")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    data = args.path.read_bytes()
    content_type = mimetypes.guess_type(args.path.name)[0] or "application/octet-stream"

    async with SocialClient(ClientConfig.from_env()) as client:
        session = client.media_session(filename=args.path.name)
        media_id = await session.initialize(
            len(data), content_type, MediaCategory.for_content_type(content_type)
        )
        for index, offset in enumerate(range(0, len(data), args.chunk_size)):
            segment = data[offset : offset + args.chunk_size]
            for attempt in range(1, args.attempts + 1):
                try:
                    await session.append_segment(media_id, index, segment)
                    break
                except TransportError as e:
                    print(f"segment {index} attempt {attempt} failed: {e}")
                    if attempt == args.attempts:
                        raise
            print(f"segment {index}: {session.bytes_sent}/{session.total_size} bytes")
        final_id = await session.finalize(media_id)
        print(f"Media id   : {final_id}")
        if session.result and session.result.processing_info:
            print(f"Processing : {session.result.processing_info}")


if __name__ == "__main__":
    asyncio.run(main())
