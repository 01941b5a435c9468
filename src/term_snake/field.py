"""Playing field bounds and static wall obstacles."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import numpy as np

from term_snake.geometry import Point, Rect

logger = logging.getLogger(__name__)

# Score line and status banner sit above the top border.
HUD_ROWS = 2
MIN_FIELD_SIZE = 4


class Field:
    """The playable interior of the board plus its walls.

    The border is drawn one cell outside :attr:`rect`; any head position
    that :meth:`contains` rejects is a crash into the border.
    """

    def __init__(self, rect: Rect) -> None:
        if rect.width < MIN_FIELD_SIZE or rect.height < MIN_FIELD_SIZE:
            raise ValueError(
                f"Field dimensions must be at least "
                f"{MIN_FIELD_SIZE}×{MIN_FIELD_SIZE}."
            )
        self.rect = rect
        self.walls: set[Point] = set()

    @classmethod
    def from_surface_size(cls, width: int, height: int) -> Field:
        """Lay out the field inside a *width* × *height* terminal.

        Rows ``0..HUD_ROWS-1`` hold the HUD, then one border row; the last
        row and the outer columns are the remaining border.
        """
        rect = Rect(
            1, HUD_ROWS + 1,
            max(width - 2, 0), max(height - HUD_ROWS - 2, 0),
        )
        return cls(rect)

    @property
    def area(self) -> int:
        return self.rect.area

    def contains(self, point: Point) -> bool:
        return self.rect.contains(point)

    def is_wall(self, point: Point) -> bool:
        return point in self.walls

    def free_cells(self, occupied: Iterable[Point] = ()) -> list[Point]:
        """Return interior cells that are neither walls nor *occupied*."""
        taken = self.walls | set(occupied)
        return [p for p in self.rect.points() if p not in taken]

    def spawn_walls(
        self,
        percentage: float,
        rng: np.random.Generator,
        exclude: Iterable[Point] = (),
    ) -> set[Point]:
        """Scatter ``floor(area * percentage / 100)`` walls over the interior.

        Samples are drawn uniformly and rejected when they hit an already
        placed wall or a cell in *exclude* (pellets, the snake). Replaces
        any existing walls and returns the new set.
        """
        if not 0 <= percentage < 100:
            raise ValueError("Wall percentage must be in [0, 100).")
        wall_count = math.floor(self.area * percentage / 100)
        blocked = {p for p in exclude if self.contains(p)}
        if wall_count > self.area - len(blocked):
            raise ValueError(
                f"Cannot place {wall_count} walls: only "
                f"{self.area - len(blocked)} free cells."
            )

        r = self.rect
        walls: set[Point] = set()
        while len(walls) < wall_count:
            candidate = Point(
                int(rng.integers(r.x, r.x2)), int(rng.integers(r.y, r.y2)),
            )
            if candidate in walls or candidate in blocked:
                continue
            walls.add(candidate)

        self.walls = walls
        logger.debug("Placed %d walls on a %dx%d field.", wall_count, r.width, r.height)
        return walls
