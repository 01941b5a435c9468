"""Shared fixtures: an in-memory display surface."""

from collections import deque

import pytest

from term_snake.surface import NO_EVENT, Key, KeyEvent


class RecordingSurface:
    """Surface double that records draw calls and replays scripted input.

    ``script`` is a list of per-poll-cycle event lists; each drain consumes
    one list and then sees ``NO_EVENT``.
    """

    def __init__(self, width=40, height=20):
        self._width = width
        self._height = height
        self.cells = {}
        self.texts = {}
        self.frames = 0
        self.polls = 0
        self.pending = deque()

    def clear(self):
        self.cells.clear()
        self.texts.clear()

    def present(self):
        self.frames += 1

    def print(self, x, y, style, fg, bg, text):
        self.texts[(x, y)] = (text, style, fg, bg)

    def print_char(self, x, y, style, fg, bg, glyph):
        self.cells[(x, y)] = (glyph, style, fg, bg)

    def width(self):
        return self._width

    def height(self):
        return self._height

    def poll_event(self, timeout_ms):
        self.polls += 1
        if self.pending:
            return self.pending.popleft()
        return NO_EVENT

    def press(self, *keys):
        for key in keys:
            if isinstance(key, str):
                self.pending.append(KeyEvent(Key.CHAR, key))
            else:
                self.pending.append(KeyEvent(key))


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def make_surface():
    return RecordingSurface
