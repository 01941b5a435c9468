"""Tick-based game loop composing field, snake, pellet and input logic."""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from term_snake.config import GameConfig
from term_snake.field import Field
from term_snake.input_buffer import InputBuffer
from term_snake.pellets import PelletSpawner
from term_snake.render import render_frame
from term_snake.snake import Direction, Snake
from term_snake.surface import Key, KeyEvent, NoEvent, Surface

logger = logging.getLogger(__name__)

_DIRECTION_KEYS: dict[Key, Direction] = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}

_QUIT_CHARS = frozenset({"q", "Q"})

# Cells straight ahead of the starting head that walls must leave open.
_SAFE_LANE = 3


class GameStatus(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    LOST = "lost"
    EXITED = "exited"


def is_quit(event: KeyEvent) -> bool:
    return event.key is Key.ESCAPE or (
        event.key is Key.CHAR and event.char in _QUIT_CHARS
    )


@dataclass
class GameState:
    """Everything the loop owns about one game, updated in place."""

    field: Field
    snake: Snake
    pellets: PelletSpawner
    score: int = 0
    status: GameStatus = GameStatus.RUNNING
    tick: int = 0

    @classmethod
    def new(
        cls,
        field: Field,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> GameState:
        """Start a game: centre the snake, drop a pellet, then the walls."""
        config = config if config is not None else GameConfig()
        rng = rng if rng is not None else np.random.default_rng(config.seed)

        start = field.rect.center
        if start.x - config.initial_length < field.rect.x:
            raise ValueError(
                f"Field is too narrow for a snake of length "
                f"{config.initial_length}."
            )
        snake = Snake(start, Direction.RIGHT, config.initial_length)

        pellets = PelletSpawner(field, rng=rng)
        pellets.spawn(snake.positions())

        lane = [start.translate(i, 0) for i in range(1, _SAFE_LANE + 1)]
        field.spawn_walls(
            config.wall_percentage, rng,
            exclude=[*pellets.positions, *snake.positions(), *lane],
        )
        return cls(field=field, snake=snake, pellets=pellets)

    def advance(self) -> None:
        """Move the snake one cell, eat what is ahead, then check for death.

        Growth is decided from the cell the head is about to enter, so the
        tail stays put on the tick a pellet is eaten.
        """
        if self.status is not GameStatus.RUNNING:
            return

        grow = self.pellets.consume(self.snake.next_head())
        if grow:
            self.score += 1
        self.snake.crawl(grow)
        self.tick += 1

        if grow:
            pellet = self.pellets.spawn(self.snake.positions())
            logger.debug("Pellet eaten, score %d, next pellet at %s.", self.score, pellet)

        head = self.snake.head
        if (
            self.snake.eating_itself()
            or not self.field.contains(head)
            or self.field.is_wall(head)
        ):
            self.snake.kill()
            self.status = GameStatus.LOST
            logger.info("Snake died at tick %d with score %d.", self.tick, self.score)


def frame_delay_ms(state: GameState, config: GameConfig) -> float:
    """Milliseconds to wait before the next tick.

    The field is crossed in ``traversal_time_ms`` at score zero. Vertical
    travel uses the stretched height so it looks as fast as horizontal on
    tall terminal cells. Each point shortens the delay by
    ``acceleration_base`` up to ``max_speed_level``.
    """
    rect = state.field.rect
    if state.snake.heading.is_vertical():
        size = rect.height * config.vertical_stretch
    else:
        size = rect.width
    level = min(state.score, config.max_speed_level)
    return config.traversal_time_ms / size * config.acceleration_base ** level


class GameLoop:
    """Single-threaded render/sleep/input/simulate loop.

    The field is sized from the surface once, at construction. Each call
    to :meth:`tick` runs one full cycle and returns the resulting status.
    """

    def __init__(
        self,
        surface: Surface,
        config: GameConfig | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.surface = surface
        self.config = config if config is not None else GameConfig()
        self.sleep = sleep
        field = Field.from_surface_size(surface.width(), surface.height())
        self.state = GameState.new(field, self.config, rng)
        self.input: InputBuffer[Key] = InputBuffer(self.config.input_capacity)

    def run(self) -> int:
        """Tick until the player quits. Returns the final score."""
        rect = self.state.field.rect
        logger.info("Game started on a %dx%d field.", rect.width, rect.height)
        while self.tick() is not GameStatus.EXITED:
            pass
        logger.info("Game exited at tick %d with score %d.", self.state.tick, self.state.score)
        return self.state.score

    def tick(self) -> GameStatus:
        render_frame(self.surface, self.state)
        self.sleep(frame_delay_ms(self.state, self.config) / 1000)
        if self.drain_input():
            self.state.status = GameStatus.EXITED
            return self.state.status
        return self.step()

    def drain_input(self) -> bool:
        """Poll until no event is pending, buffering game keys.

        Returns True as soon as a quit key is seen.
        """
        while True:
            event = self.surface.poll_event(self.config.poll_timeout_ms)
            if isinstance(event, NoEvent):
                return False
            if not isinstance(event, KeyEvent):
                continue
            if is_quit(event):
                return True
            if event.key in _DIRECTION_KEYS or event.key is Key.SPACE:
                self.input.push(event.key)

    def step(self) -> GameStatus:
        """Apply at most one buffered key, then advance the simulation."""
        state = self.state
        key = self.input.pop()
        candidate = _DIRECTION_KEYS.get(key)

        if key is Key.SPACE:
            self._toggle_pause()
        if state.status is GameStatus.PAUSED:
            return state.status

        if candidate is not None:
            state.snake.set_direction(candidate)
        if state.status is GameStatus.LOST:
            return state.status

        state.advance()
        return state.status

    def _toggle_pause(self) -> None:
        state = self.state
        if state.status is GameStatus.RUNNING:
            state.status = GameStatus.PAUSED
        elif state.status is GameStatus.PAUSED:
            state.status = GameStatus.RUNNING
        else:
            return
        logger.debug("Status is now %s at tick %d.", state.status.value, state.tick)
