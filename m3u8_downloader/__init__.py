"""Download HLS (m3u8) streams into a single file."""

from .downloader import M3U8Parser, SegmentDownloader, VideoDownloader, download
from .errors import (
    FetchError,
    M3U8DownloadError,
    MalformedPlaylistError,
    NetworkError,
    NoVariantFoundError,
    SegmentFetchError,
)
from .models import DownloadOptions, M3U8Info, Playlist, Segment, Variant
from .utils import HttpClient, resolve_url

__version__ = "0.1.0"

__all__ = [
    "download",
    "M3U8Parser",
    "SegmentDownloader",
    "VideoDownloader",
    "HttpClient",
    "resolve_url",
    "M3U8DownloadError",
    "NetworkError",
    "FetchError",
    "MalformedPlaylistError",
    "NoVariantFoundError",
    "SegmentFetchError",
    "Playlist",
    "Variant",
    "Segment",
    "M3U8Info",
    "DownloadOptions",
]
