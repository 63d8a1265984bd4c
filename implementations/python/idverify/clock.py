"""
Externally driven block-height clock used to stamp registry records.
"""

from __future__ import annotations

from typing import Callable, Optional

from . import config

Clock = Callable[[], int]


class BlockClock:
    """A manually advanced, monotonic block height.

    Stores call the clock with no arguments to read the current height.
    The height only moves when the caller advances it.
    """

    def __init__(self, height: Optional[int] = None) -> None:
        if height is None:
            height = config.START_HEIGHT
        if not isinstance(height, int) or height < 0:
            raise ValueError("BlockClock(): height must be a non-negative int")
        self._height = height

    @property
    def height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move the clock forward and return the new height.

        Raises:
            ValueError: When blocks is negative.
        """
        if not isinstance(blocks, int) or blocks < 0:
            raise ValueError("advance(): blocks must be a non-negative int")
        self._height += blocks
        return self._height

    def __call__(self) -> int:
        return self._height

    def __repr__(self) -> str:
        return f"BlockClock(height={self._height})"
