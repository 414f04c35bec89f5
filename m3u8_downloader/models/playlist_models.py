"""Pydantic models that describe playlists, variants, and media segments."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..utils.http_client import DEFAULT_TIMEOUT

STREAM_INF_TAG = "#EXT-X-STREAM-INF"

DEFAULT_CONCURRENCY = 10
DEFAULT_MAX_DEPTH = 5


class Playlist(BaseModel):
    """Raw playlist text together with the URL it was fetched from."""

    url: str
    text: str

    @property
    def is_master(self) -> bool:
        return any(STREAM_INF_TAG in line for line in self.text.splitlines())


class Variant(BaseModel):
    """One rendition listed by a master playlist."""

    bandwidth: int = Field(ge=0)
    uri: str


class Segment(BaseModel):
    """A media segment; ``data`` is filled in once its fetch completes."""

    index: int = Field(ge=0)
    url: str
    data: Optional[bytes] = None


class M3U8Info(BaseModel):
    """The media playlist a download finally resolved to."""

    url: str
    segments: List[Segment]

    @property
    def segment_urls(self) -> List[str]:
        return [segment.url for segment in self.segments]


class DownloadOptions(BaseModel):
    """Settings for a single stream download."""

    url: str
    output_file: str
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, gt=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_playlist_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0)
