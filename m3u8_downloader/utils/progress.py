"""Progress observers for segment downloads."""

from __future__ import annotations

from typing import Callable, Optional

from tqdm import tqdm

# Receives ``(advance, total)`` once per segment written.
ProgressCallback = Callable[[int, int], None]


class TqdmProgress:
    """Renders segment progress with a tqdm bar.

    The bar is created on the first update because the segment count is only
    known once the media playlist has been parsed.
    """

    def __init__(self, desc: str = "Downloading segments", disable: bool = False) -> None:
        self.desc = desc
        self.disable = disable
        self._bar: Optional[tqdm] = None

    def __call__(self, advance: int, total: int) -> None:
        if self._bar is None:
            self._bar = tqdm(total=total, desc=self.desc, unit="seg", disable=self.disable)
        self._bar.update(advance)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
