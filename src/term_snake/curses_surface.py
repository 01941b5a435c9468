"""curses binding of the display surface."""

from __future__ import annotations

import curses
import logging
import os
from collections.abc import Callable
from typing import TypeVar

from term_snake.surface import (
    NO_EVENT,
    Color,
    Event,
    Key,
    KeyEvent,
    OtherEvent,
    Style,
    SurfaceError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NO_INPUT = "no input"

_CURSES_COLORS: dict[Color, int] = {
    Color.DEFAULT: -1,
    Color.BLACK: curses.COLOR_BLACK,
    Color.RED: curses.COLOR_RED,
    Color.GREEN: curses.COLOR_GREEN,
    Color.YELLOW: curses.COLOR_YELLOW,
    Color.BLUE: curses.COLOR_BLUE,
    Color.MAGENTA: curses.COLOR_MAGENTA,
    Color.CYAN: curses.COLOR_CYAN,
    Color.WHITE: curses.COLOR_WHITE,
}

_ARROW_KEYS: dict[int, Key] = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
}


def translate_key(ch: int | str) -> Event:
    """Map a ``get_wch`` result to a surface event."""
    if isinstance(ch, int):
        if ch in _ARROW_KEYS:
            return KeyEvent(_ARROW_KEYS[ch])
        if ch == curses.KEY_RESIZE:
            return OtherEvent("resize")
        return OtherEvent(f"keycode {ch}")
    if ch == "\x1b":
        return KeyEvent(Key.ESCAPE)
    if ch == " ":
        return KeyEvent(Key.SPACE)
    return KeyEvent(Key.CHAR, ch)


class CursesSurface:
    """Draws on a curses window and reads keys from it."""

    def __init__(self, stdscr: curses.window) -> None:
        self.stdscr = stdscr
        self._pairs: dict[tuple[Color, Color], int] = {}
        try:
            stdscr.keypad(True)
            self._colors = curses.has_colors()
            if self._colors:
                curses.start_color()
                curses.use_default_colors()
        except curses.error as exc:
            raise SurfaceError(f"Failed to initialize terminal: {exc}") from exc
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor.")

    def clear(self) -> None:
        self.stdscr.erase()

    def present(self) -> None:
        self.stdscr.refresh()

    def width(self) -> int:
        return self.stdscr.getmaxyx()[1]

    def height(self) -> int:
        return self.stdscr.getmaxyx()[0]

    def print(
        self, x: int, y: int, style: Style, fg: Color, bg: Color, text: str,
    ) -> None:
        rows, cols = self.stdscr.getmaxyx()
        if not (0 <= y < rows and 0 <= x < cols):
            return
        try:
            self.stdscr.addstr(y, x, text[: cols - x], self._attr(style, fg, bg))
        except curses.error:
            # addstr reports an error after writing the bottom-right cell.
            pass

    def print_char(
        self, x: int, y: int, style: Style, fg: Color, bg: Color, glyph: str,
    ) -> None:
        self.print(x, y, style, fg, bg, glyph[:1])

    def poll_event(self, timeout_ms: int) -> Event:
        self.stdscr.timeout(timeout_ms)
        try:
            ch = self.stdscr.get_wch()
        except curses.error as exc:
            # get_wch reports an expired timeout as "no input".
            if str(exc) == _NO_INPUT:
                return NO_EVENT
            raise
        return translate_key(ch)

    def _attr(self, style: Style, fg: Color, bg: Color) -> int:
        attr = curses.A_BOLD if style is Style.BOLD else curses.A_NORMAL
        if not self._colors:
            return attr
        pair = self._pairs.get((fg, bg))
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return attr
            curses.init_pair(pair, _CURSES_COLORS[fg], _CURSES_COLORS[bg])
            self._pairs[(fg, bg)] = pair
        return attr | curses.color_pair(pair)


def run_in_terminal(fn: Callable[[CursesSurface], T]) -> T:
    """Take over the terminal via ``curses.wrapper`` and call *fn* with a surface.

    A curses failure before *fn* starts is a :class:`SurfaceError`; later
    ones propagate unchanged.
    """
    # Escape must register as a key press without a long wait.
    os.environ.setdefault("ESCDELAY", "25")
    started = False

    def _main(stdscr: curses.window) -> T:
        nonlocal started
        surface = CursesSurface(stdscr)
        started = True
        return fn(surface)

    try:
        return curses.wrapper(_main)
    except curses.error as exc:
        if started:
            raise
        raise SurfaceError(f"Failed to initialize terminal: {exc}") from exc
