"""Tools for resolving m3u8 playlists into an ordered list of segment URLs."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..errors import MalformedPlaylistError, NoVariantFoundError
from ..models import M3U8Info, Playlist, Segment, Variant
from ..models.playlist_models import DEFAULT_MAX_DEPTH, STREAM_INF_TAG
from ..utils.http_client import HttpClient
from ..utils.url_utils import resolve_url

# Plain BANDWIDTH only; AVERAGE-BANDWIDTH must not match.
BANDWIDTH_PATTERN = re.compile(r"(?<![A-Z-])BANDWIDTH=(\d+)")


def is_master_playlist(text: str) -> bool:
    return Playlist(url="", text=text).is_master


def select_variant(text: str, base_url: str) -> Variant:
    """Picks the variant with the highest bandwidth from a master playlist.

    A stream-info tag must be immediately followed by its URI line. Only a
    strictly greater bandwidth replaces the current pick, so ties keep the
    variant that appears first.
    """

    lines = [line.strip() for line in text.splitlines()]
    selected: Optional[Variant] = None
    for position, line in enumerate(lines):
        if STREAM_INF_TAG not in line:
            continue

        if position + 1 >= len(lines):
            raise MalformedPlaylistError(f"{STREAM_INF_TAG} on line {position + 1} of {base_url} has no URI line")
        uri = lines[position + 1]
        if not uri or uri.startswith("#"):
            raise MalformedPlaylistError(
                f"{STREAM_INF_TAG} on line {position + 1} of {base_url} is not followed by a URI"
            )

        match = BANDWIDTH_PATTERN.search(line)
        if not match:
            logging.debug("Skipping variant without BANDWIDTH on line %s", position + 1)
            continue
        bandwidth = int(match.group(1))
        if selected is None or bandwidth > selected.bandwidth:
            selected = Variant(bandwidth=bandwidth, uri=resolve_url(uri, base_url))

    if selected is None:
        raise NoVariantFoundError(base_url)

    logging.info("Selected stream with bandwidth %s", selected.bandwidth)
    return selected


def extract_segments(text: str, base_url: str) -> List[Segment]:
    """Returns the media playlist's segments in playback order."""

    segments: List[Segment] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        segments.append(Segment(index=len(segments), url=resolve_url(line, base_url)))
    return segments


class M3U8Parser:
    """Fetches m3u8 manifests and follows master playlists down to the media one."""

    def __init__(self, http_client: HttpClient, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be a positive integer")
        self._http_client = http_client
        self.max_depth = max_depth

    def parse(self, m3u8_url: str) -> M3U8Info:
        playlist = self._fetch(m3u8_url)
        hops = 0
        while playlist.is_master:
            if hops >= self.max_depth:
                raise MalformedPlaylistError(
                    f"Gave up after following {hops} master playlists starting at {m3u8_url}"
                )
            logging.info("Detected master playlist %s. Selecting highest quality stream...", playlist.url)
            variant = select_variant(playlist.text, playlist.url)
            playlist = self._fetch(variant.uri)
            hops += 1

        segments = extract_segments(playlist.text, playlist.url)
        if segments:
            logging.info("Found %s segments to download", len(segments))
        else:
            logging.warning("m3u8 at %s did not contain any segments", playlist.url)
        return M3U8Info(url=playlist.url, segments=segments)

    def _fetch(self, url: str) -> Playlist:
        logging.debug("Fetching playlist %s", url)
        return Playlist(url=url, text=self._http_client.fetch_cdn_text(url))
