"""Exceptions raised while resolving playlists and downloading segments."""

from __future__ import annotations

from typing import Optional


class M3U8DownloadError(Exception):
    """Base class for every fatal download failure."""


class NetworkError(M3U8DownloadError):
    """Raised when the transport fails (DNS, refused connection, timeout)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Network error while fetching {url}: {reason}")
        self.url = url
        self.reason = reason


class FetchError(M3U8DownloadError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, url: str, status: int, reason: Optional[str] = None) -> None:
        message = f"Failed to fetch {url}: {status}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.url = url
        self.status = status
        self.reason = reason


class MalformedPlaylistError(M3U8DownloadError):
    """Raised when a playlist violates the expected tag sequence."""


class NoVariantFoundError(M3U8DownloadError):
    """Raised when a master playlist has no selectable variant."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Master playlist {url} does not contain a variant with a BANDWIDTH attribute")
        self.url = url


class SegmentFetchError(M3U8DownloadError):
    """Raised when any segment of a batch could not be fetched."""

    def __init__(self, index: int, url: str, cause: BaseException) -> None:
        super().__init__(f"Segment #{index} ({url}) failed: {cause}")
        self.index = index
        self.url = url
        self.cause = cause
