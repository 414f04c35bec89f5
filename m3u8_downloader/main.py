from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

from .downloader.video_downloader import download
from .models.playlist_models import DEFAULT_CONCURRENCY, DEFAULT_MAX_DEPTH
from .utils.http_client import DEFAULT_TIMEOUT
from .utils.progress import TqdmProgress

load_dotenv()


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_float(name: str) -> float | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env_positive_int(name: str) -> int | None:
    value = _env_int(name)
    if value is None or value < 1:
        return None
    return value


def _env_positive_float(name: str) -> float | None:
    value = _env_float(name)
    if value is None or value <= 0:
        return None
    return value


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero: {value!r}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="m3u8-downloader",
        description="Download an HLS (m3u8) stream into a single file.",
    )
    parser.add_argument("url", help="URL of the master or media m3u8 playlist")
    parser.add_argument("output_file", help="File the concatenated segments are written to")
    parser.add_argument(
        "concurrency",
        nargs="?",
        type=_positive_int,
        default=_env_positive_int("M3U8_CONCURRENCY") or DEFAULT_CONCURRENCY,
        help="Number of segments fetched per batch (default: 10)",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=_env_positive_float("M3U8_TIMEOUT") or DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds",
    )
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=_env_positive_int("M3U8_MAX_DEPTH") or DEFAULT_MAX_DEPTH,
        help="How many nested master playlists may be followed",
    )
    parser.add_argument("--no-progress", action="store_true", help="Do not render a progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    level_name = "DEBUG" if verbose else (_env_str("M3U8_LOG_LEVEL") or "INFO")
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    with TqdmProgress(disable=args.no_progress) as progress:
        try:
            download(
                args.url,
                args.output_file,
                args.concurrency,
                timeout=args.timeout,
                max_playlist_depth=args.max_depth,
                progress=progress,
            )
        except Exception as exc:
            logging.error("Error downloading M3U8: %s", exc)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
