import logging

import pytest

from m3u8_downloader import main as cli
from m3u8_downloader.downloader import video_downloader as video_module
from m3u8_downloader.errors import FetchError, SegmentFetchError


@pytest.fixture
def recorded_downloads(monkeypatch):
    calls = []

    def fake_download(url, output_file, concurrency, **kwargs):
        calls.append((url, output_file, concurrency, kwargs))

    monkeypatch.setattr(cli, "download", fake_download)
    return calls


def test_missing_arguments_exit_with_usage(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["http://h/a.m3u8"])

    assert excinfo.value.code != 0
    assert "usage:" in capsys.readouterr().err


def test_concurrency_defaults_to_ten(recorded_downloads, monkeypatch):
    monkeypatch.delenv("M3U8_CONCURRENCY", raising=False)

    assert cli.main(["http://h/a.m3u8", "out.ts", "--no-progress"]) == 0

    url, output_file, concurrency, kwargs = recorded_downloads[0]
    assert (url, output_file, concurrency) == ("http://h/a.m3u8", "out.ts", 10)
    assert kwargs["timeout"] == 30.0
    assert kwargs["max_playlist_depth"] == 5
    assert callable(kwargs["progress"])


def test_explicit_concurrency_and_options(recorded_downloads):
    assert cli.main(["http://h/a.m3u8", "out.ts", "4", "--timeout", "7.5", "--max-depth", "2", "--no-progress"]) == 0

    _, _, concurrency, kwargs = recorded_downloads[0]
    assert concurrency == 4
    assert kwargs["timeout"] == 7.5
    assert kwargs["max_playlist_depth"] == 2


def test_environment_supplies_defaults(recorded_downloads, monkeypatch):
    monkeypatch.setenv("M3U8_CONCURRENCY", "3")
    monkeypatch.setenv("M3U8_TIMEOUT", "not-a-number")

    cli.main(["http://h/a.m3u8", "out.ts", "--no-progress"])

    _, _, concurrency, kwargs = recorded_downloads[0]
    assert concurrency == 3
    assert kwargs["timeout"] == 30.0


@pytest.mark.parametrize("value", ["0", "-2", "many"])
def test_invalid_concurrency_is_a_usage_error(value):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["http://h/a.m3u8", "out.ts", value])

    assert excinfo.value.code == 2


def test_download_errors_exit_with_one(monkeypatch, caplog):
    def failing_download(*args, **kwargs):
        cause = FetchError("http://h/1.ts", 500, "Internal Server Error")
        raise SegmentFetchError(1, "http://h/1.ts", cause)

    monkeypatch.setattr(cli, "download", failing_download)

    with caplog.at_level(logging.ERROR):
        assert cli.main(["http://h/a.m3u8", "out.ts", "--no-progress"]) == 1

    assert "http://h/1.ts" in caplog.text


@pytest.mark.parametrize(
    "name, value",
    [
        ("M3U8_CONCURRENCY", "-3"),
        ("M3U8_CONCURRENCY", "0"),
        ("M3U8_TIMEOUT", "0"),
        ("M3U8_TIMEOUT", "-1.5"),
        ("M3U8_MAX_DEPTH", "0"),
    ],
)
def test_non_positive_environment_values_are_ignored(recorded_downloads, monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    assert cli.main(["http://h/a.m3u8", "out.ts", "--no-progress"]) == 0

    _, _, concurrency, kwargs = recorded_downloads[0]
    assert concurrency == 10
    assert kwargs["timeout"] == 30.0
    assert kwargs["max_playlist_depth"] == 5


def test_unwritable_output_exits_with_one(fake_client, monkeypatch, tmp_path, caplog):
    client = fake_client(texts={"http://h/a.m3u8": "#EXTM3U\n#EXT-X-ENDLIST\n"})

    class ClientFactory:
        def __init__(self, timeout):
            pass

        def __enter__(self):
            return client

        def __exit__(self, exc_type, exc_value, traceback):
            return False

    monkeypatch.setattr(video_module, "HttpClient", ClientFactory)

    with caplog.at_level(logging.ERROR):
        assert cli.main(["http://h/a.m3u8", str(tmp_path), "--no-progress"]) == 1

    assert "Error downloading M3U8" in caplog.text
