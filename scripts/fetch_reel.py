#!/usr/bin/env python
"""Script to resolve a post reference and save the video to disk."""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from reel_relay.config import get_settings
from reel_relay.services import MediaFetcher, ProviderClient, RelayError, iter_media, resolve_media_url
from reel_relay.utils.filenames import download_filename


async def fetch(reference: str, output: Path | None) -> Path:
    settings = get_settings()
    provider = ProviderClient(settings)
    media_fetcher = MediaFetcher(settings)
    try:
        media_url = await resolve_media_url(provider, reference)
        media_resp = await media_fetcher.open(media_url)
        target = output or Path(download_filename(settings.filename_prefix))
        with target.open("wb") as fh:
            async for chunk in iter_media(media_resp, media_fetcher.chunk_size):
                fh.write(chunk)
        return target
    finally:
        await provider.close()
        await media_fetcher.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Download a reel by short code, id or URL")
    parser.add_argument("reference", help="Short code, numeric id or full post URL")
    parser.add_argument("--output", type=Path, default=None)
    args = parser.parse_args()

    reference = args.reference.strip()
    if not reference:
        parser.error("reference must not be empty")

    try:
        target = asyncio.run(fetch(reference, args.output))
    except RelayError as exc:
        print(f"error: {exc.public_message} ({exc.detail})", file=sys.stderr)
        sys.exit(1)
    print(f"Saved {target}")


if __name__ == "__main__":
    main()
