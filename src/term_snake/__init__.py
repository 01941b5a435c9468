"""Term Snake — terminal snake game core."""

from term_snake.config import GameConfig
from term_snake.field import Field
from term_snake.game import GameLoop, GameState, GameStatus, frame_delay_ms
from term_snake.geometry import Point, Rect
from term_snake.input_buffer import InputBuffer
from term_snake.pellets import PelletSpawner
from term_snake.snake import Direction, Segment, Snake

__all__ = [
    "Direction",
    "Field",
    "GameConfig",
    "GameLoop",
    "GameState",
    "GameStatus",
    "InputBuffer",
    "PelletSpawner",
    "Point",
    "Rect",
    "Segment",
    "Snake",
    "frame_delay_ms",
]
