"""Integer grid geometry: points and axis-aligned rectangles."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Point:
    """A terminal cell coordinate. ``x`` grows right, ``y`` grows down."""

    x: int
    y: int

    def translate(self, dx: int, dy: int) -> Point:
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, left/top inclusive and right/bottom exclusive."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Rect dimensions must be non-negative.")

    @property
    def x2(self) -> int:
        return self.x + self.width

    @property
    def y2(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width // 2, self.y + self.height // 2)

    def contains(self, point: Point) -> bool:
        """Check whether *point* lies inside the rectangle."""
        return self.x <= point.x < self.x2 and self.y <= point.y < self.y2

    def points(self) -> Iterator[Point]:
        """Yield every cell of the rectangle in row-major order."""
        for y in range(self.y, self.y2):
            for x in range(self.x, self.x2):
                yield Point(x, y)
