"""Store a local file through a configured uploader.

Usage:
    python -m scripts.upload_from_path <uploader> <path> [--keep] [--content-type TYPE]

The file is stored under its own base name and removed afterwards unless
--keep is given. Reads the uploaders configuration from UPLOADERS_CONFIG_PATH.
"""

import argparse
import asyncio
import sys

from file_uploader.core.lifespan import build_registry
from file_uploader.domain.exceptions import UploaderException
from file_uploader.shared.telemetry.logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upload a local file via a named uploader")
    parser.add_argument("uploader", help="Uploader name from the uploaders configuration")
    parser.add_argument("path", help="Local file to store")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep the source file after a successful upload",
    )
    parser.add_argument(
        "--content-type",
        default=None,
        help="MIME type to check and store (default: guessed from the file name)",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Upload one file; print key and URL. Returns the process exit code."""
    args = parse_args(argv)
    setup_logging()
    try:
        service = build_registry().get(args.uploader)
        key = await service.upload_from_path(
            args.path,
            delete_source_after=not args.keep,
            content_type=args.content_type,
        )
    except UploaderException as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        return 1
    print(f"Stored key: {key}")
    print(f"URL: {service.get_url(key)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
