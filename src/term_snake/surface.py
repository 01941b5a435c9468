"""Display surface contract consumed by the game loop."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol, Union


class SurfaceError(RuntimeError):
    """The terminal could not be set up for drawing."""


class Style(enum.Enum):
    NORMAL = "normal"
    BOLD = "bold"


class Color(enum.Enum):
    DEFAULT = "default"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"


class Key(enum.Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ESCAPE = "escape"
    SPACE = "space"
    CHAR = "char"


@dataclass(frozen=True)
class KeyEvent:
    """A key press. ``char`` is only set for :attr:`Key.CHAR`."""

    key: Key
    char: str = ""


@dataclass(frozen=True)
class NoEvent:
    """Nothing arrived before the poll timeout."""


@dataclass(frozen=True)
class OtherEvent:
    """Any input that is not a key press, e.g. a resize."""

    name: str


NO_EVENT = NoEvent()

Event = Union[KeyEvent, NoEvent, OtherEvent]


class Surface(Protocol):
    """Absolute-cell character surface, e.g. a terminal screen."""

    def clear(self) -> None: ...

    def present(self) -> None: ...

    def print(
        self, x: int, y: int, style: Style, fg: Color, bg: Color, text: str,
    ) -> None: ...

    def print_char(
        self, x: int, y: int, style: Style, fg: Color, bg: Color, glyph: str,
    ) -> None: ...

    def width(self) -> int: ...

    def height(self) -> int: ...

    def poll_event(self, timeout_ms: int) -> Event: ...
