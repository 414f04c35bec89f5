"""Downloads an HLS stream into a single file."""

from __future__ import annotations

import logging
from typing import Optional

from ..models import DownloadOptions, M3U8Info
from ..utils.http_client import DEFAULT_TIMEOUT, HttpClient
from ..utils.progress import ProgressCallback
from .m3u8_parser import DEFAULT_MAX_DEPTH, M3U8Parser
from .segment_downloader import DEFAULT_CONCURRENCY, SegmentDownloader


class VideoDownloader:
    """Resolves a playlist down to its media variant and stores its segments."""

    def __init__(
        self,
        http_client: HttpClient,
        workers: int = DEFAULT_CONCURRENCY,
        max_playlist_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.workers = workers
        self._parser = M3U8Parser(http_client, max_depth=max_playlist_depth)
        self._segments = SegmentDownloader(http_client, concurrency=workers)

    def download(
        self,
        m3u8_url: str,
        output_file: str,
        progress: Optional[ProgressCallback] = None,
    ) -> M3U8Info:
        logging.info("Starting download of M3U8 stream: %s", m3u8_url)
        logging.info("Output file: %s", output_file)
        logging.info("Concurrency: %s", self.workers)

        info = self._parser.parse(m3u8_url)
        try:
            self._segments.download_to_file(info.segments, output_file, progress)
        except Exception:
            logging.error("Download of %s aborted; %s is incomplete", info.url, output_file)
            raise
        logging.info("Download completed: %s", output_file)
        return info


def download(
    source_url: str,
    output_path: str,
    concurrency: int = DEFAULT_CONCURRENCY,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    max_playlist_depth: int = DEFAULT_MAX_DEPTH,
    progress: Optional[ProgressCallback] = None,
) -> M3U8Info:
    """Downloads the stream at ``source_url`` into ``output_path``.

    Master playlists are followed to their highest-bandwidth variant. Any
    failure raises an :class:`~m3u8_downloader.errors.M3U8DownloadError`
    subclass and leaves a partially written ``output_path`` behind.
    """

    options = DownloadOptions(
        url=source_url,
        output_file=output_path,
        concurrency=concurrency,
        timeout=timeout,
        max_playlist_depth=max_playlist_depth,
    )
    return download_with_options(options, progress=progress)


def download_with_options(options: DownloadOptions, progress: Optional[ProgressCallback] = None) -> M3U8Info:
    with HttpClient(timeout=options.timeout) as http_client:
        downloader = VideoDownloader(
            http_client,
            workers=options.concurrency,
            max_playlist_depth=options.max_playlist_depth,
        )
        return downloader.download(options.url, options.output_file, progress)
