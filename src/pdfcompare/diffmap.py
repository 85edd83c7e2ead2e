"""Incremental grouping of mismatching pixels into rectangles."""
from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from .geometry import EMPTY, Rect

DEFAULT_HORIZONTAL_TOLERANCE = 4
DEFAULT_VERTICAL_TOLERANCE = 1


class DifferenceMap:
    """Accumulates mismatching pixels, fed in row-major order, into regions.

    A mismatch either extends the currently open region, when it falls inside
    the catch area (the open region inflated by the tolerances), or closes the
    open region and starts a new 1x1 one. Closed regions are kept in the order
    they were closed and are never merged afterwards, so a later region may
    overlap an earlier one.

    :meth:`rollup_errors` must be called once the scan stops to flush the
    region that is still open.
    """

    def __init__(
        self,
        horizontal_tolerance: int = DEFAULT_HORIZONTAL_TOLERANCE,
        vertical_tolerance: int = DEFAULT_VERTICAL_TOLERANCE,
    ) -> None:
        if horizontal_tolerance < 0 or vertical_tolerance < 0:
            raise ValueError("Tolerances must be non-negative")
        self.horizontal_tolerance = int(horizontal_tolerance)
        self.vertical_tolerance = int(vertical_tolerance)
        self._areas: List[Rect] = []
        self._open: Rect = EMPTY

    @property
    def open_region(self) -> Rect:
        return self._open

    @property
    def catch_area(self) -> Rect:
        # derived from the open region on every access
        return self._open.inflate(self.horizontal_tolerance, self.vertical_tolerance)

    @property
    def areas(self) -> Tuple[Rect, ...]:
        return tuple(self._areas)

    @property
    def size(self) -> int:
        return len(self._areas)

    def __len__(self) -> int:
        return len(self._areas)

    def __iter__(self) -> Iterator[Rect]:
        return iter(self.areas)

    def add_pixel(self, x: int, y: int) -> None:
        """Record a mismatching pixel at ``(x, y)``."""

        if self.catch_area.contains(x, y):
            if not self._open.contains(x, y):
                self._open = self._open.union(Rect.pixel(x, y))
            return
        if not self._open.is_empty:
            self._areas.append(self._open)
        self._open = Rect.pixel(x, y)

    def rollup_errors(self) -> None:
        """Close the open region, if any. Calling it again is a no-op."""

        if not self._open.is_empty:
            self._areas.append(self._open)
        self._open = EMPTY

    def to_dict(self) -> List[Dict[str, int]]:
        return [area.to_dict() for area in self._areas]

    def __repr__(self) -> str:
        return (
            f"DifferenceMap(size={self.size}, open={self._open!r}, "
            f"tolerance=({self.horizontal_tolerance}, {self.vertical_tolerance}))"
        )
