"""Data models for playlists, variants, segments, and download settings."""

from .playlist_models import DownloadOptions, M3U8Info, Playlist, Segment, Variant

__all__ = [
    "Playlist",
    "Variant",
    "Segment",
    "M3U8Info",
    "DownloadOptions",
]
