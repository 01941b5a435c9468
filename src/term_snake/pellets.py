"""Pellet spawning logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from term_snake.geometry import Point

if TYPE_CHECKING:
    from term_snake.field import Field

logger = logging.getLogger(__name__)


class PelletSpawner:
    """Manages pellet placement inside the field.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    New pellets never land on walls, existing pellets or occupied cells.
    """

    def __init__(
        self,
        field: Field,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.field = field
        self.rng = rng if rng is not None else np.random.default_rng()
        self.positions: set[Point] = set()

    def __contains__(self, point: object) -> bool:
        return point in self.positions

    def spawn(self, occupied: Iterable[Point] = ()) -> Point | None:
        """Place one pellet on a free cell and return it.

        Returns ``None`` if the field has no free cell left.
        """
        free = self.field.free_cells(self.positions | set(occupied))
        if not free:
            logger.warning("No free cells available for pellet spawning.")
            return None

        pellet = free[int(self.rng.integers(len(free)))]
        self.positions.add(pellet)
        return pellet

    def consume(self, point: Point) -> bool:
        """Remove a pellet at *point*. Returns True if one was there."""
        if point in self.positions:
            self.positions.remove(point)
            return True
        return False
