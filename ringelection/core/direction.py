"""Ring-relative direction of travel for election messages."""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """Orientation along the ring.

    FORWARD moves toward ring position ``i + 1``, BACKWARD toward ``i - 1``
    (both modulo the ring size).
    """

    FORWARD = 1
    BACKWARD = -1

    @property
    def offset(self) -> int:
        """Position delta applied when moving one hop in this direction."""
        return self.value

    def opposite(self) -> Direction:
        return Direction.BACKWARD if self is Direction.FORWARD else Direction.FORWARD
