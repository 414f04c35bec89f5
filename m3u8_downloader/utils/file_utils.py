"""Filesystem helpers for preparing the output location."""

from __future__ import annotations

import os
from pathlib import Path


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def ensure_parent_directory(output_file: str) -> str:
    """Creates the folder that will hold ``output_file`` and returns it."""

    parent = os.path.dirname(os.path.abspath(output_file)) or "."
    return ensure_directory(parent)
