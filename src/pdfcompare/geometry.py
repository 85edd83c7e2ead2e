"""Integer rectangles in raster (pixel) coordinates."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle with exclusive right and bottom edges.

    ``Rect()`` is the empty rectangle. Any rectangle with a non-positive
    width or height is empty and never contains a point.
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def pixel(cls, x: int, y: int) -> "Rect":
        return cls(x, y, 1, 1)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, px: int, py: int) -> bool:
        if self.is_empty:
            return False
        return self.x <= px < self.right and self.y <= py < self.bottom

    def union(self, other: "Rect") -> "Rect":
        """Return the smallest rectangle enclosing ``self`` and ``other``."""

        if other.is_empty:
            return self
        if self.is_empty:
            return other
        x0 = min(self.x, other.x)
        y0 = min(self.y, other.y)
        x1 = max(self.right, other.right)
        y1 = max(self.bottom, other.bottom)
        return Rect(x0, y0, x1 - x0, y1 - y0)

    def inflate(self, dx: int, dy: int) -> "Rect":
        """Grow by ``dx`` on the left and right and ``dy`` on top and bottom."""

        if self.is_empty:
            return self
        return Rect(self.x - dx, self.y - dy, self.width + 2 * dx, self.height + 2 * dy)

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


EMPTY = Rect()
