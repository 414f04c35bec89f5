"""Batched segment downloads written to a single sink in playback order."""

from __future__ import annotations

import asyncio
import logging
from typing import BinaryIO, Iterator, List, Optional, Sequence, TypeVar

from ..errors import SegmentFetchError
from ..models import Segment
from ..models.playlist_models import DEFAULT_CONCURRENCY
from ..utils.file_utils import ensure_parent_directory
from ..utils.http_client import HttpClient
from ..utils.progress import ProgressCallback

T = TypeVar("T")


def iter_batches(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yields consecutive slices of ``items`` holding at most ``size`` entries."""

    if size < 1:
        raise ValueError("batch size must be a positive integer")
    for start in range(0, len(items), size):
        yield items[start : start + size]


class SegmentDownloader:
    """Downloads segments batch by batch and appends them to a sink in order.

    Each batch is a barrier: all of its fetches finish before any of its
    segments is written, and the next batch is not started before the writes
    are done. At most ``concurrency`` segments are held in memory.
    """

    def __init__(self, http_client: HttpClient, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be a positive integer")
        self.concurrency = concurrency
        self._http_client = http_client

    def download(
        self,
        segments: Sequence[Segment],
        sink: BinaryIO,
        progress: Optional[ProgressCallback] = None,
    ) -> int:
        """Writes every segment to ``sink`` and returns the number of bytes written."""

        if not segments:
            return 0
        return asyncio.run(self._download_batches(segments, sink, progress))

    def download_to_file(
        self,
        segments: Sequence[Segment],
        output_file: str,
        progress: Optional[ProgressCallback] = None,
    ) -> int:
        ensure_parent_directory(output_file)
        with open(output_file, "wb") as sink:
            written = self.download(segments, sink, progress)
            sink.flush()
        logging.info("Saved %s bytes to %s", written, output_file)
        return written

    async def _download_batches(
        self,
        segments: Sequence[Segment],
        sink: BinaryIO,
        progress: Optional[ProgressCallback],
    ) -> int:
        ordered = sorted(segments, key=lambda item: item.index)
        total = len(ordered)
        written = 0
        try:
            for batch_number, batch in enumerate(iter_batches(ordered, self.concurrency), start=1):
                logging.debug("Fetching batch %s (%s segments)", batch_number, len(batch))
                fetched = await self._fetch_batch(batch)
                for segment in sorted(fetched, key=lambda item: item.index):
                    sink.write(segment.data or b"")
                    written += len(segment.data or b"")
                    if progress:
                        progress(1, total)
        finally:
            await self._close_transport()
        return written

    async def _fetch_batch(self, batch: Sequence[Segment]) -> List[Segment]:
        results = await asyncio.gather(
            *(self._http_client.fetch_cdn_bytes(segment.url) for segment in batch),
            return_exceptions=True,
        )

        fetched: List[Segment] = []
        for segment, result in zip(batch, results):
            if isinstance(result, BaseException):
                logging.error("TS #%s download failed: %s", segment.index, result)
                raise SegmentFetchError(segment.index, segment.url, result) from result
            fetched.append(segment.model_copy(update={"data": result}))
            logging.debug("Downloaded TS #%s", segment.index)
        return fetched

    async def _close_transport(self) -> None:
        await self._http_client.aclose()
