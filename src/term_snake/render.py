"""Draws a game state onto a display surface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from term_snake.geometry import Point, Rect
from term_snake.snake import head_glyph
from term_snake.surface import Color, Style, Surface

if TYPE_CHECKING:
    from term_snake.game import GameState

WALL_GLYPH = "▒"
PELLET_GLYPH = " "

_BORDER_HORIZONTAL = "─"
_BORDER_VERTICAL = "│"
_BORDER_CORNERS = ("┌", "┐", "└", "┘")


def _put(
    surface: Surface, point: Point, style: Style, fg: Color, bg: Color, glyph: str,
) -> None:
    # Cells left or above the surface are not drawable.
    if point.x < 0 or point.y < 0:
        return
    surface.print_char(point.x, point.y, style, fg, bg, glyph)


def _draw_hud(surface: Surface, state: GameState) -> None:
    from term_snake.game import GameStatus

    surface.print(
        0, 0, Style.BOLD, Color.YELLOW, Color.DEFAULT, f"Score: {state.score}",
    )
    if state.status is GameStatus.LOST:
        surface.print(0, 1, Style.BOLD, Color.RED, Color.DEFAULT, "GAME OVER")
    elif state.status is GameStatus.PAUSED:
        surface.print(0, 1, Style.BOLD, Color.YELLOW, Color.DEFAULT, "PAUSED")


def _draw_border(surface: Surface, rect: Rect) -> None:
    left, top, right, bottom = rect.x - 1, rect.y - 1, rect.x2, rect.y2
    for x in range(rect.x, rect.x2):
        for y in (top, bottom):
            _put(surface, Point(x, y), Style.NORMAL, Color.WHITE, Color.DEFAULT, _BORDER_HORIZONTAL)
    for y in range(rect.y, rect.y2):
        for x in (left, right):
            _put(surface, Point(x, y), Style.NORMAL, Color.WHITE, Color.DEFAULT, _BORDER_VERTICAL)
    corners = (Point(left, top), Point(right, top), Point(left, bottom), Point(right, bottom))
    for corner, glyph in zip(corners, _BORDER_CORNERS, strict=True):
        _put(surface, corner, Style.NORMAL, Color.WHITE, Color.DEFAULT, glyph)


def render_frame(surface: Surface, state: GameState) -> None:
    """Draw one full frame: HUD, border, walls, pellets, then the snake."""
    surface.clear()
    _draw_hud(surface, state)
    _draw_border(surface, state.field.rect)

    for wall in sorted(state.field.walls):
        _put(surface, wall, Style.NORMAL, Color.WHITE, Color.DEFAULT, WALL_GLYPH)

    for pellet in sorted(state.pellets.positions):
        _put(surface, pellet, Style.BOLD, Color.DEFAULT, Color.RED, PELLET_GLYPH)

    snake = state.snake
    for segment in snake.body:
        _put(surface, segment.position, Style.NORMAL, Color.YELLOW, Color.GREEN, segment.symbol)
    head_color = Color.YELLOW if snake.alive else Color.RED
    _put(surface, snake.head, Style.BOLD, head_color, Color.GREEN, head_glyph(snake.heading))

    surface.present()
