"""Snake representation, movement and body glyph logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass

from term_snake.geometry import Point


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Glyph for the cell the head just left, keyed by (previous, current) heading.
_SEGMENT_GLYPHS: dict[tuple[Direction, Direction], str] = {
    (Direction.UP, Direction.UP): "│",
    (Direction.DOWN, Direction.DOWN): "│",
    (Direction.LEFT, Direction.LEFT): "─",
    (Direction.RIGHT, Direction.RIGHT): "─",
    (Direction.UP, Direction.RIGHT): "╭",
    (Direction.LEFT, Direction.DOWN): "╭",
    (Direction.UP, Direction.LEFT): "╮",
    (Direction.RIGHT, Direction.DOWN): "╮",
    (Direction.DOWN, Direction.LEFT): "╯",
    (Direction.RIGHT, Direction.UP): "╯",
    (Direction.DOWN, Direction.RIGHT): "╰",
    (Direction.LEFT, Direction.UP): "╰",
}

# Reversals never reach crawl() through set_direction().
FALLBACK_GLYPH = "#"

_HEAD_GLYPHS: dict[Direction, str] = {
    Direction.UP: "↑",
    Direction.DOWN: "↓",
    Direction.LEFT: "←",
    Direction.RIGHT: "→",
}


def segment_glyph(previous: Direction, current: Direction) -> str:
    """Return the body glyph for a turn from *previous* to *current*."""
    return _SEGMENT_GLYPHS.get((previous, current), FALLBACK_GLYPH)


def head_glyph(direction: Direction) -> str:
    return _HEAD_GLYPHS[direction]


@dataclass(frozen=True)
class Segment:
    """One body cell and the glyph it was drawn with when created."""

    position: Point
    symbol: str


class Snake:
    """A snake whose head is tracked apart from its body segments.

    ``body[0]`` is the neck; ``body[-1]`` is the tail tip. The head
    position is never stored in ``body``.
    """

    def __init__(
        self,
        head: Point = Point(10, 10),
        heading: Direction = Direction.RIGHT,
        length: int = 6,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = heading.value
        straight = segment_glyph(heading, heading)
        self.head = head
        self.heading = heading
        self.previous_heading = heading
        self.body: deque[Segment] = deque(
            Segment(head.translate(-dx * i, -dy * i), straight)
            for i in range(1, length + 1)
        )
        self._alive = True

    def __len__(self) -> int:
        return len(self.body)

    @property
    def alive(self) -> bool:
        return self._alive

    def next_head(self) -> Point:
        """Compute the next head position without moving."""
        dx, dy = self.heading.value
        return self.head.translate(dx, dy)

    def crawl(self, grow: bool = False) -> None:
        """Move one cell along the heading, keeping the tail when *grow*."""
        if not grow:
            self.body.pop()
        symbol = segment_glyph(self.previous_heading, self.heading)
        self.body.appendleft(Segment(self.head, symbol))
        self.previous_heading = self.heading
        self.head = self.next_head()

    def eating_itself(self) -> bool:
        """Check whether any body segment occupies the head cell."""
        return any(segment.position == self.head for segment in self.body)

    def set_direction(self, new_direction: Direction) -> None:
        """Change heading, ignoring 180° reversals and dead snakes."""
        if not self._alive or new_direction == self.heading.opposite():
            return
        self.previous_heading = self.heading
        self.heading = new_direction

    def kill(self) -> None:
        self._alive = False

    def positions(self) -> Iterator[Point]:
        """Yield the head followed by every body position."""
        yield self.head
        for segment in self.body:
            yield segment.position
