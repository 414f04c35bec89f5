"""Utility helpers for HTTP, URLs, progress, and filesystem operations."""

from .file_utils import ensure_directory, ensure_parent_directory
from .http_client import HttpClient
from .progress import ProgressCallback, TqdmProgress
from .url_utils import resolve_url

__all__ = [
    "HttpClient",
    "resolve_url",
    "ensure_directory",
    "ensure_parent_directory",
    "ProgressCallback",
    "TqdmProgress",
]
