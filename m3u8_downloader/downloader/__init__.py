"""Playlist resolution and ordered segment downloads."""

from .m3u8_parser import M3U8Parser, extract_segments, is_master_playlist, select_variant
from .segment_downloader import SegmentDownloader, iter_batches
from .video_downloader import VideoDownloader, download, download_with_options

__all__ = [
    "M3U8Parser",
    "SegmentDownloader",
    "VideoDownloader",
    "download",
    "download_with_options",
    "extract_segments",
    "is_master_playlist",
    "select_variant",
    "iter_batches",
]
