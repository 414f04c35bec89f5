"""Shared HTTP helpers for playlist and segment requests."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
import requests

from ..errors import FetchError, NetworkError

REAL_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)

CDN_HEADERS: Dict[str, str] = {
    "user-agent": REAL_USER_AGENT,
    "accept": "*/*",
}

DEFAULT_TIMEOUT = 30.0


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class HttpClient:
    """Fetches playlists synchronously and segments asynchronously.

    Every failure is surfaced either as :class:`FetchError` (the server answered
    with a non-2xx status) or :class:`NetworkError` (no usable answer at all).
    Nothing is retried.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, headers: Optional[Dict[str, str]] = None) -> None:
        self.timeout = timeout
        self._cdn_headers = CDN_HEADERS.copy()
        if headers:
            self._cdn_headers.update(headers)

        self._cdn_session = requests.Session()
        self._cdn_session.headers.update(self._cdn_headers)

        self._cdn_async_session: Optional[aiohttp.ClientSession] = None
        self._cdn_async_lock: Optional[asyncio.Lock] = None
        self._cdn_loop: Optional[asyncio.AbstractEventLoop] = None

    def fetch_cdn_text(self, url: str) -> str:
        """Fetch a CDN resource as text (e.g., m3u8)."""

        try:
            response = self._cdn_session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logging.error("Playlist request to %s failed: %s", url, exc)
            raise NetworkError(url, str(exc)) from exc

        if not _is_success(response.status_code):
            logging.error("Playlist request to %s returned %s", url, response.status_code)
            raise FetchError(url, response.status_code, response.reason)
        return response.text

    async def fetch_cdn_bytes(self, url: str) -> bytes:
        """Asynchronously fetch a CDN resource (TS segment) into memory."""

        session = await self._get_cdn_async_session()
        try:
            async with session.get(url) as resp:
                if not _is_success(resp.status):
                    raise FetchError(url, resp.status, resp.reason)
                return await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NetworkError(url, str(exc) or type(exc).__name__) from exc

    async def _get_cdn_async_session(self) -> aiohttp.ClientSession:
        current_loop = asyncio.get_running_loop()
        if self._cdn_async_session:
            if (
                self._cdn_async_session.closed
                or not self._cdn_loop
                or self._cdn_loop.is_closed()
                or self._cdn_loop is not current_loop
            ):
                await self._shutdown_cdn_session()

        if self._cdn_async_lock is None or self._cdn_loop is not current_loop:
            self._cdn_async_lock = asyncio.Lock()

        async with self._cdn_async_lock:
            if self._cdn_async_session and not self._cdn_async_session.closed:
                return self._cdn_async_session
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            connector = aiohttp.TCPConnector(limit=0)
            self._cdn_async_session = aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                headers=self._cdn_headers.copy(),
            )
            self._cdn_loop = current_loop
        return self._cdn_async_session

    async def _shutdown_cdn_session(self) -> None:
        session = self._cdn_async_session
        self._cdn_async_session = None
        self._cdn_loop = None
        if session and not session.closed:
            try:
                await session.close()
            except RuntimeError as exc:  # pragma: no cover - session bound to a dead loop
                logging.debug("Ignoring error while closing segment session: %s", exc)

    async def aclose(self) -> None:
        """Close the segment session; call from the loop that created it."""

        await self._shutdown_cdn_session()

    def close(self) -> None:
        self._cdn_session.close()

        if self._cdn_async_session and not self._cdn_async_session.closed:
            try:
                asyncio.get_running_loop()
            except RuntimeError:
                asyncio.run(self._shutdown_cdn_session())
            else:
                logging.warning("HttpClient.close() called inside an event loop; await aclose() first")
        self._cdn_async_session = None
        self._cdn_loop = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
