import asyncio
import io

import pytest

from m3u8_downloader.errors import FetchError


class FakeHttpClient:
    """In-memory stand-in for HttpClient that records what was requested."""

    def __init__(self, texts=None, payloads=None, delays=None, failures=None, events=None):
        self.texts = texts or {}
        self.payloads = payloads or {}
        self.delays = delays or {}
        self.failures = failures or {}
        self.events = events if events is not None else []
        self.text_requests = []
        self.closed_async = 0

    def fetch_cdn_text(self, url):
        self.text_requests.append(url)
        if url not in self.texts:
            raise FetchError(url, 404, "Not Found")
        return self.texts[url]

    async def fetch_cdn_bytes(self, url):
        self.events.append(("fetch", url))
        await asyncio.sleep(self.delays.get(url, 0))
        if url in self.failures:
            raise self.failures[url]
        if url not in self.payloads:
            raise FetchError(url, 404, "Not Found")
        self.events.append(("done", url))
        return self.payloads[url]

    async def aclose(self):
        self.closed_async += 1


class RecordingSink(io.BytesIO):
    """Byte sink that logs each write into a shared event list."""

    def __init__(self, events=None):
        super().__init__()
        self.events = events if events is not None else []
        self.chunks = []

    def write(self, data):
        self.events.append(("write", bytes(data)))
        self.chunks.append(bytes(data))
        return super().write(data)


@pytest.fixture
def fake_client():
    return FakeHttpClient


@pytest.fixture
def recording_sink():
    return RecordingSink
