"""Resolution of playlist URIs against the URL of their manifest."""

from __future__ import annotations

from urllib.parse import urlsplit

ABSOLUTE_PREFIXES = ("http://", "https://")


def resolve_url(reference: str, base_url: str) -> str:
    """Turns a playlist URI into an absolute URL.

    Absolute references are returned untouched, root-relative ones are joined
    to the scheme and authority of ``base_url``, and everything else is joined
    to the directory of ``base_url``. ``..`` segments and query strings are
    left as they are.
    """

    if reference.startswith(ABSOLUTE_PREFIXES):
        return reference

    origin = _origin(base_url)
    if reference.startswith("/"):
        return f"{origin}{reference}" if origin else reference

    directory = base_url.rsplit("/", 1)[0]
    if origin and len(directory) < len(origin):
        # "http://host" has no path, so the authority is the directory
        directory = origin
    return f"{directory}/{reference}"


def _origin(url: str) -> str:
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return ""
    return f"{parts.scheme}://{parts.netloc}"
