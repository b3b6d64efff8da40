"""
Tests for key bindings, swipe resolution and overlay clicks.
"""

import os
import random
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import Snake, UP, DOWN, LEFT, RIGHT, START, PLAYING, PAUSED, GAME_OVER  # noqa: E402
from engine import GameController  # noqa: E402
from engine.controls import (  # noqa: E402
    KEY_BINDINGS,
    handle_key,
    handle_escape,
    handle_overlay_click,
    handle_swipe,
    resolve_swipe,
)


@pytest.fixture
def game():
    return GameController(rng=random.Random(0), clock=lambda: 0.0)


def end_game(game):
    game.state.snake = Snake([(0, 9)])
    game.submit_direction(LEFT)
    game.tick(now=1000)
    assert game.phase == GAME_OVER


class TestKeys:
    """Tests for handle_key."""

    @pytest.mark.parametrize("code,direction", [
        ("ArrowUp", UP), ("KeyW", UP),
        ("ArrowDown", DOWN), ("KeyS", DOWN),
        ("ArrowLeft", LEFT), ("KeyA", LEFT),
    ])
    def test_direction_keys(self, game, code, direction):
        game.start()
        assert handle_key(game, code)
        assert game.state.pending_direction == direction

    def test_every_binding_is_a_direction(self):
        assert set(KEY_BINDINGS.values()) == {UP, DOWN, LEFT, RIGHT}

    def test_direction_key_on_start_screen_starts(self, game):
        handle_key(game, "ArrowUp")
        assert game.phase == PLAYING

    def test_space_starts_pauses_and_resumes(self, game):
        handle_key(game, "Space")
        assert game.phase == PLAYING
        handle_key(game, "Space")
        assert game.phase == PAUSED
        handle_key(game, "Space")
        assert game.phase == PLAYING

    def test_space_does_nothing_after_game_over(self, game):
        game.start()
        end_game(game)
        assert handle_key(game, "Space")
        assert game.phase == GAME_OVER

    def test_enter_starts(self, game):
        handle_key(game, "Enter")
        assert game.phase == PLAYING

    def test_enter_restarts_after_game_over(self, game):
        game.start()
        end_game(game)
        handle_key(game, "Enter")
        assert game.phase == PLAYING
        assert list(game.state.snake.positions) == [(12, 9)]

    def test_enter_does_not_pause(self, game):
        game.start()
        handle_key(game, "Enter")
        assert game.phase == PLAYING

    def test_escape(self, game):
        game.start()
        handle_key(game, "Escape")
        assert game.phase == PAUSED
        handle_key(game, "Escape")
        assert game.phase == PLAYING

    def test_escape_on_start_screen_is_noop(self, game):
        assert not handle_escape(game)
        assert game.phase == START

    def test_unknown_key(self, game):
        assert not handle_key(game, "KeyZ")
        assert game.phase == START


class TestOverlayClick:
    """Tests for handle_overlay_click."""

    def test_start_screen(self, game):
        assert handle_overlay_click(game)
        assert game.phase == PLAYING

    def test_pause_screen(self, game):
        game.start()
        game.pause()
        assert handle_overlay_click(game)
        assert game.phase == PLAYING

    def test_game_over_screen(self, game):
        game.start()
        end_game(game)
        assert handle_overlay_click(game)
        assert game.phase == PLAYING

    def test_no_overlay_while_playing(self, game):
        game.start()
        assert not handle_overlay_click(game)
        assert game.phase == PLAYING


class TestSwipe:
    """Tests for swipe resolution."""

    @pytest.mark.parametrize("dx,dy,expected", [
        (40, 10, RIGHT),
        (-40, 10, LEFT),
        (5, 50, DOWN),
        (5, -50, UP),
        (30, 0, RIGHT),
        (40, 40, DOWN),
        (-40, -40, UP),
    ])
    def test_dominant_axis(self, dx, dy, expected):
        assert resolve_swipe(dx, dy, 30) == expected

    @pytest.mark.parametrize("dx,dy", [(0, 0), (10, 5), (29.9, -29.9)])
    def test_jitter_below_threshold_ignored(self, dx, dy):
        assert resolve_swipe(dx, dy, 30) is None

    def test_swipe_steers_running_game(self, game):
        game.start()
        assert handle_swipe(game, 0, -80)
        assert game.state.pending_direction == UP

    def test_short_swipe_ignored(self, game):
        game.start()
        assert not handle_swipe(game, 0, -10)
        assert game.state.pending_direction == RIGHT

    def test_swipe_does_not_start_game(self, game):
        assert not handle_swipe(game, 0, -80)
        assert game.phase == START
