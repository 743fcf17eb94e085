"""Command-line client for the watermark service.

Posts a base image and a watermark to ``/watermark`` and saves the PNG
that comes back. With ``--local`` the same composition runs in-process
and no server is needed.

Usage:
    tilemark-client --base photo.jpg --watermark logo.png --outfile out.png
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import httpx

from tilemark.errors import TilemarkError
from tilemark.pipeline import DEFAULT_TARGET, CompositionPipeline

logger = logging.getLogger(__name__)

DEFAULT_URL = os.getenv("TILEMARK_URL", "http://localhost:3210/watermark")


def post_files(
    base_path: str,
    watermark_path: str,
    url: str = DEFAULT_URL,
    timeout: float = 60.0,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Response:
    """Upload both images as multipart parts ``image`` and ``watermark``.

    Raises:
        OSError: If either file cannot be read.
        httpx.HTTPError: On connection failures and timeouts.
    """
    with open(base_path, "rb") as base_file, open(watermark_path, "rb") as watermark_file:
        files = {
            "image": (os.path.basename(base_path), base_file.read()),
            "watermark": (os.path.basename(watermark_path), watermark_file.read()),
        }
    with httpx.Client(timeout=timeout, transport=transport) as client:
        return client.post(url, files=files)


def compose_local(base_path: str, watermark_path: str, width: int, height: int) -> bytes:
    """Compose the two files in-process and return the PNG bytes."""
    with open(base_path, "rb") as f:
        base_bytes = f.read()
    with open(watermark_path, "rb") as f:
        watermark_bytes = f.read()
    pipeline = CompositionPipeline(width, height)
    return pipeline.compose(base_bytes, base_path, watermark_bytes, watermark_path)


def _error_detail(response: httpx.Response) -> str:
    try:
        return str(response.json().get("detail", response.text))
    except ValueError:
        return response.text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilemark-client",
        description="Tile a watermark over a base image and save the result as PNG.",
    )
    parser.add_argument("--base", required=True, help="base image (PNG or JPEG)")
    parser.add_argument("--watermark", required=True, help="watermark image (PNG or JPEG)")
    parser.add_argument("--outfile", default="result.png", help="output file name (png)")
    parser.add_argument("--url", default=DEFAULT_URL, help="service endpoint (default: %(default)s)")
    parser.add_argument("--timeout", type=float, default=60.0, help="request timeout in seconds")
    parser.add_argument("--local", action="store_true", help="compose in-process instead of calling the service")
    parser.add_argument("--width", type=int, default=DEFAULT_TARGET[0], help="output width for --local")
    parser.add_argument("--height", type=int, default=DEFAULT_TARGET[1], help="output height for --local")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None, transport: Optional[httpx.BaseTransport] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.local:
            png = compose_local(args.base, args.watermark, args.width, args.height)
        else:
            response = post_files(args.base, args.watermark, args.url, args.timeout, transport)
            print(f"{response.status_code} {response.reason_phrase}")
            if response.is_error:
                print(f"Error: {_error_detail(response)}", file=sys.stderr)
                return 1
            png = response.content
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"Error posting to {args.url}: {e}", file=sys.stderr)
        return 1
    except TilemarkError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        with open(args.outfile, "wb") as f:
            f.write(png)
    except OSError as e:
        print(f"Error saving {args.outfile}: {e}", file=sys.stderr)
        return 1
    print(f"Saved to {args.outfile}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
