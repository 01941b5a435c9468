"""Tests for the game state and loop."""

import numpy as np
import pytest

from term_snake.config import GameConfig
from term_snake.field import Field
from term_snake.game import GameLoop, GameState, GameStatus, frame_delay_ms
from term_snake.geometry import Point, Rect
from term_snake.snake import Direction, Snake
from term_snake.surface import Key, KeyEvent, OtherEvent


def _make_loop(surface, seed=0, **config_kwargs):
    config_kwargs.setdefault("wall_percentage", 0.0)
    sleeps = []
    loop = GameLoop(
        surface, GameConfig(**config_kwargs),
        sleep=sleeps.append, rng=np.random.default_rng(seed),
    )
    return loop, sleeps


class TestGameStateInit:
    def test_snake_starts_centred(self, surface):
        loop, _ = _make_loop(surface)
        state = loop.state
        assert state.field.rect == Rect(1, 3, 38, 16)
        assert state.snake.head == state.field.rect.center
        assert state.snake.heading == Direction.RIGHT
        assert len(state.snake) == 6
        assert state.status is GameStatus.RUNNING
        assert state.score == 0

    def test_one_pellet_off_the_snake(self, surface):
        loop, _ = _make_loop(surface)
        (pellet,) = loop.state.pellets.positions
        assert loop.state.field.contains(pellet)
        assert pellet not in set(loop.state.snake.positions())

    def test_walls_avoid_pellet_snake_and_lane(self, surface):
        loop, _ = _make_loop(surface, wall_percentage=5.0)
        state = loop.state
        assert len(state.field.walls) == 38 * 16 * 5 // 100
        assert not state.field.walls & state.pellets.positions
        assert not state.field.walls & set(state.snake.positions())
        head = state.snake.head
        for i in range(1, 4):
            assert head.translate(i, 0) not in state.field.walls

    def test_field_too_narrow(self):
        with pytest.raises(ValueError, match="too narrow"):
            GameState.new(Field(Rect(0, 0, 8, 8)), GameConfig(wall_percentage=0))

    def test_same_seed_same_board(self):
        a = GameState.new(Field(Rect(0, 0, 30, 12)), rng=np.random.default_rng(5))
        b = GameState.new(Field(Rect(0, 0, 30, 12)), rng=np.random.default_rng(5))
        assert a.pellets.positions == b.pellets.positions
        assert a.field.walls == b.field.walls


class TestFrameDelay:
    def test_horizontal(self, surface):
        loop, _ = _make_loop(surface)
        assert frame_delay_ms(loop.state, loop.config) == pytest.approx(8000 / 38)

    def test_vertical_uses_stretched_height(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.snake.set_direction(Direction.UP)
        assert frame_delay_ms(loop.state, loop.config) == pytest.approx(8000 / (16 * 1.5))

    def test_accelerates_with_score(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.score = 3
        assert frame_delay_ms(loop.state, loop.config) == pytest.approx(
            8000 / 38 * 0.95 ** 3,
        )

    def test_speed_level_capped(self, surface):
        loop, _ = _make_loop(surface, max_speed_level=10)
        loop.state.score = 10
        capped = frame_delay_ms(loop.state, loop.config)
        loop.state.score = 500
        assert frame_delay_ms(loop.state, loop.config) == pytest.approx(capped)

    def test_tick_sleeps_for_delay(self, surface):
        loop, sleeps = _make_loop(surface)
        loop.tick()
        assert sleeps == [pytest.approx(8000 / 38 / 1000)]


class TestMovement:
    def test_tick_moves_snake(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.pellets.positions.clear()
        head = loop.state.snake.head
        assert loop.tick() is GameStatus.RUNNING
        assert loop.state.snake.head == head.translate(1, 0)
        assert loop.state.tick == 1

    def test_arrow_key_turns(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.pellets.positions.clear()
        head = loop.state.snake.head
        surface.press(Key.UP)
        loop.tick()
        assert loop.state.snake.head == head.translate(0, -1)

    def test_one_key_per_tick(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.pellets.positions.clear()
        surface.press(Key.DOWN, Key.LEFT)
        loop.tick()
        assert loop.state.snake.heading == Direction.DOWN
        loop.tick()
        assert loop.state.snake.heading == Direction.LEFT

    def test_down_then_up_does_not_reverse(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.pellets.positions.clear()
        surface.press(Key.DOWN, Key.UP)
        loop.tick()
        assert loop.state.snake.heading == Direction.DOWN
        loop.tick()
        assert loop.state.snake.heading == Direction.DOWN
        assert loop.state.status is GameStatus.RUNNING

    def test_buffer_overflow_drops_extra_keys(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.pellets.positions.clear()
        surface.press(Key.DOWN, Key.LEFT, Key.UP)
        loop.tick()
        loop.tick()
        loop.tick()
        assert loop.state.snake.heading == Direction.LEFT

    def test_other_events_ignored(self, surface):
        loop, _ = _make_loop(surface)
        surface.pending.extend([OtherEvent("resize"), KeyEvent(Key.CHAR, "x")])
        assert not loop.drain_input()
        assert len(loop.input) == 0
        assert surface.polls == 3

    def test_heading_never_reverses_between_ticks(self, make_surface):
        surface = make_surface(width=120, height=60)
        loop, _ = _make_loop(surface, seed=11)
        rng = np.random.default_rng(99)
        arrows = [Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT]
        for _ in range(200):
            keys = rng.choice(len(arrows), size=int(rng.integers(0, 4)))
            surface.press(*(arrows[k] for k in keys))
            before = loop.state.snake.heading
            loop.tick()
            assert loop.state.snake.heading != before.opposite()


class TestPellets:
    def test_eating_scenario(self, surface):
        loop, _ = _make_loop(surface)
        state = loop.state
        target = state.snake.next_head()
        tail = state.snake.body[-1].position
        state.pellets.positions = {target}
        loop.tick()
        assert state.score == 1
        assert len(state.snake) == 7
        assert state.snake.body[-1].position == tail
        assert state.snake.head == target
        assert len(state.pellets.positions) == 1
        assert target not in state.pellets.positions

    def test_growth_matches_pellets_eaten(self, surface):
        loop, _ = _make_loop(surface)
        state = loop.state
        for _ in range(5):
            state.pellets.positions = {state.snake.next_head()}
            loop.tick()
        assert state.score == 5
        assert len(state.snake) == 6 + 5
        assert state.status is GameStatus.RUNNING


class TestLosing:
    def test_right_boundary(self, surface):
        loop, _ = _make_loop(surface)
        state = loop.state
        state.pellets.positions.clear()
        state.snake = Snake(Point(state.field.rect.x2 - 1, 10), Direction.RIGHT)
        assert loop.tick() is GameStatus.LOST
        assert not state.field.contains(state.snake.head)
        assert not state.snake.alive
        state.snake.set_direction(Direction.UP)
        assert state.snake.heading == Direction.RIGHT

    def test_wall_hit(self, surface):
        loop, _ = _make_loop(surface)
        state = loop.state
        state.pellets.positions.clear()
        state.field.walls = {state.snake.next_head()}
        assert loop.tick() is GameStatus.LOST

    def test_self_collision(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.pellets.positions.clear()
        for key in (Key.DOWN, Key.LEFT, Key.UP):
            surface.press(key)
            loop.tick()
        assert loop.state.status is GameStatus.LOST
        assert loop.state.snake.eating_itself()

    def test_lost_freezes_but_keeps_rendering(self, surface):
        loop, _ = _make_loop(surface)
        state = loop.state
        state.pellets.positions.clear()
        state.field.walls = {state.snake.next_head()}
        loop.tick()
        head, frames = state.snake.head, surface.frames
        surface.press(Key.UP)
        assert loop.tick() is GameStatus.LOST
        assert state.snake.head == head
        assert surface.frames == frames + 1
        assert surface.texts[(0, 1)][0] == "GAME OVER"


class TestPause:
    def test_space_toggles_pause(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.pellets.positions.clear()
        head = loop.state.snake.head
        surface.press(Key.SPACE)
        assert loop.tick() is GameStatus.PAUSED
        assert loop.tick() is GameStatus.PAUSED
        assert loop.state.snake.head == head
        surface.press(Key.SPACE)
        assert loop.tick() is GameStatus.RUNNING
        assert loop.state.snake.head == head.translate(1, 0)

    def test_direction_ignored_while_paused(self, surface):
        loop, _ = _make_loop(surface)
        surface.press(Key.SPACE)
        loop.tick()
        surface.press(Key.UP)
        loop.tick()
        assert loop.state.snake.heading == Direction.RIGHT

    def test_pause_ignored_after_loss(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.status = GameStatus.LOST
        surface.press(Key.SPACE)
        assert loop.tick() is GameStatus.LOST


class TestQuit:
    @pytest.mark.parametrize("key", [Key.ESCAPE, "q"])
    def test_quit_key_exits_on_current_tick(self, surface, key):
        loop, _ = _make_loop(surface)
        head = loop.state.snake.head
        surface.press(Key.RIGHT, key, Key.UP)
        assert loop.tick() is GameStatus.EXITED
        assert loop.state.snake.head == head

    @pytest.mark.parametrize("status", [GameStatus.PAUSED, GameStatus.LOST])
    def test_quit_from_any_state(self, surface, status):
        loop, _ = _make_loop(surface)
        loop.state.status = status
        surface.press("q")
        assert loop.tick() is GameStatus.EXITED

    def test_run_returns_score(self, surface):
        loop, _ = _make_loop(surface)
        loop.state.score = 4
        surface.press(Key.ESCAPE)
        assert loop.run() == 4
        assert surface.frames == 1
