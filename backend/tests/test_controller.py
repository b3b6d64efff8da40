"""
Tests for the GameController phase machine and frame loop.
"""

import os
import random
import sys
from unittest.mock import MagicMock

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig  # noqa: E402
from domain import (  # noqa: E402
    Snake, GridConfigurationError, UP, DOWN, LEFT, RIGHT,
    START, PLAYING, PAUSED, GAME_OVER,
)
from engine import GameController, events  # noqa: E402
from players import GreedyPlayer  # noqa: E402


class FakeClock:
    """Millisecond clock controlled by the test."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def make_game(store=None, renderer=None, seed=0, config=None):
    clock = FakeClock()
    game = GameController(
        config=config,
        rng=random.Random(seed),
        high_score_store=store,
        clock=clock,
        renderer=renderer
    )
    return game, clock


def started_game(**kwargs):
    game, clock = make_game(**kwargs)
    game.start()
    return game, clock


def force_wall_collision(game, clock):
    """Put the head on the left edge, steer left and run one tick."""
    game.state.snake = Snake([(0, 9)])
    game.state.food = (20, 9)
    game.submit_direction(LEFT)
    clock.now += game.state.tick_interval_ms
    game.tick()


class TestInitialization:
    """Tests for controller construction."""

    def test_starts_in_start_phase(self):
        game, _ = make_game()
        state = game.get_current_state()

        assert state.phase == START
        assert state.snake_positions == [(12, 9)]
        assert state.direction == RIGHT
        assert state.score == 0
        assert state.level == 1
        assert state.tick_interval_ms == 150
        assert state.food not in state.snake_positions
        assert (state.width, state.height) == (24, 18)

    def test_degenerate_grid_rejected_before_play(self):
        with pytest.raises(GridConfigurationError):
            GameController(config=GameConfig(cell_size=500))

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            GameController(config=GameConfig(min_tick_ms=0))

    def test_high_score_loaded_from_store(self):
        store = MagicMock()
        store.load.return_value = 120
        game, _ = make_game(store=store)
        assert game.high_score == 120

    def test_high_score_load_failure_defaults_to_zero(self):
        store = MagicMock()
        store.load.side_effect = RuntimeError("disk on fire")
        game, _ = make_game(store=store)
        assert game.high_score == 0

    def test_no_store_means_zero(self):
        game, _ = make_game()
        assert game.high_score == 0


class TestPhaseTransitions:
    """Tests for the lifecycle actions."""

    def test_start_enters_playing(self):
        game, _ = make_game()
        assert game.start()
        assert game.phase == PLAYING
        assert game.running

    def test_start_only_from_start_phase(self):
        game, _ = started_game()
        assert not game.start()
        assert game.phase == PLAYING

    def test_pause_and_resume(self):
        game, _ = started_game()
        assert game.pause()
        assert game.phase == PAUSED
        assert not game.running

        assert game.resume()
        assert game.phase == PLAYING
        assert game.running

    def test_pause_twice_is_same_as_once(self):
        game, _ = started_game()
        game.pause()
        before = game.get_current_state().to_dict()

        assert not game.pause()
        assert game.phase == PAUSED
        assert game.get_current_state().to_dict() == before

    def test_pause_does_not_mutate_state(self):
        game, _ = started_game()
        before = game.get_current_state().to_dict()
        game.pause()
        after = game.get_current_state().to_dict()

        before.pop("phase")
        after.pop("phase")
        assert before == after

    def test_toggle_pause(self):
        game, _ = started_game()
        assert game.toggle_pause()
        assert game.phase == PAUSED
        assert game.toggle_pause()
        assert game.phase == PLAYING

    def test_toggle_pause_noop_on_start_screen(self):
        game, _ = make_game()
        assert not game.toggle_pause()
        assert game.phase == START

    @pytest.mark.parametrize("action", ["pause", "resume", "restart"])
    def test_inapplicable_actions_on_start_screen(self, action):
        game, _ = make_game()
        assert not getattr(game, action)()
        assert game.phase == START

    def test_restart_not_available_while_playing(self):
        game, _ = started_game()
        game.state.score = 30
        assert not game.restart()
        assert game.phase == PLAYING
        assert game.state.score == 30

    def test_visibility_loss_pauses(self):
        game, _ = started_game()
        assert game.on_visibility_change(hidden=True)
        assert game.phase == PAUSED

    def test_visibility_gain_does_not_resume(self):
        game, _ = started_game()
        game.pause()
        assert not game.on_visibility_change(hidden=False)
        assert game.phase == PAUSED

    def test_start_resets_the_board(self):
        game, _ = make_game()
        game.state.score = 70
        game.state.snake = Snake([(1, 1), (2, 1)])
        game.start()

        assert game.state.score == 0
        assert list(game.state.snake.positions) == [(12, 9)]


class TestTick:
    """Tests for the frame callback."""

    def test_no_step_before_start(self):
        game, clock = make_game()
        clock.now = 1000
        assert not game.tick()
        assert list(game.state.snake.positions) == [(12, 9)]

    def test_step_after_interval(self):
        game, clock = started_game()
        game.state.food = (0, 0)

        clock.now = 149
        assert not game.tick()
        clock.now = 150
        assert game.tick()
        assert list(game.state.snake.positions) == [(13, 9)]

    def test_long_frame_steps_once(self):
        game, clock = started_game()
        game.state.food = (0, 0)

        clock.now = 1000
        assert game.tick()
        assert not game.tick()
        assert list(game.state.snake.positions) == [(13, 9)]

    def test_explicit_timestamp(self):
        game, _ = started_game()
        game.state.food = (0, 0)
        assert not game.tick(now=100)
        assert not game.tick(now=249)
        assert game.tick(now=250)

    def test_driver_timestamps_from_another_clock(self):
        game, clock = make_game()
        clock.now = 5_000_000
        game.start()
        game.state.food = (0, 0)

        assert not game.tick(now=0)
        assert not game.tick(now=149)
        assert game.tick(now=150)
        assert list(game.state.snake.positions) == [(13, 9)]

    def test_driver_timestamps_behind_controller_clock(self):
        game, clock = make_game()
        clock.now = 1_000
        game.start()
        game.state.food = (0, 0)

        assert not game.tick(now=5_000_000)
        assert game.tick(now=5_000_150)

    def test_frame_timestamps_with_default_clock(self):
        game = GameController(rng=random.Random(0))
        game.start()
        game.state.food = (0, 0)

        steps = sum(game.tick(now=t) for t in range(0, 1500, 16))
        assert steps > 0
        assert game.phase == PLAYING

    def test_start_with_driver_timestamp(self):
        game, clock = make_game()
        clock.now = 9_999
        game.start(now=500)
        game.state.food = (0, 0)

        assert not game.tick(now=649)
        assert game.tick(now=650)

    def test_resume_reanchors_on_driver_timestamp(self):
        game, clock = make_game()
        clock.now = 5_000_000
        game.start()
        game.state.food = (0, 0)
        game.tick(now=0)
        game.pause()

        clock.now = 9_000_000
        game.resume()
        assert not game.tick(now=20_000)
        assert not game.tick(now=20_149)
        assert game.tick(now=20_150)
        assert list(game.state.snake.positions) == [(13, 9)]

    def test_restart_with_driver_timestamp(self):
        game, clock = started_game()
        force_wall_collision(game, clock)

        game.restart(now=40)
        game.state.food = (0, 0)
        assert not game.tick(now=189)
        assert game.tick(now=190)

    def test_eating_scenario(self):
        game, clock = started_game()
        game.state.food = (13, 9)

        clock.now = 150
        game.tick()
        state = game.get_current_state()

        assert state.snake_positions == [(13, 9), (12, 9)]
        assert state.score == 10
        assert state.level == 1
        assert state.food not in state.snake_positions

    def test_level_up_scenario(self):
        game, clock = started_game()
        game.state.score = 40
        game.state.food = (13, 9)

        clock.now = 150
        game.tick()

        assert game.state.score == 50
        assert game.state.level == 2
        assert game.state.tick_interval_ms == 145

    def test_new_interval_gates_next_tick(self):
        game, clock = started_game()
        game.state.score = 40
        game.state.food = (13, 9)
        clock.now = 150
        game.tick()
        game.state.food = (0, 0)

        clock.now = 294
        assert not game.tick()
        clock.now = 295
        assert game.tick()

    def test_wall_collision_scenario(self):
        game, clock = started_game()
        force_wall_collision(game, clock)

        assert game.phase == GAME_OVER
        assert list(game.state.snake.positions) == [(0, 9)]
        assert not game.running

    def test_no_ticks_after_game_over(self):
        game, clock = started_game()
        force_wall_collision(game, clock)

        clock.now += 10_000
        assert not game.tick()
        assert list(game.state.snake.positions) == [(0, 9)]

    def test_self_collision_ends_game(self):
        game, clock = started_game()
        body = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
        game.state.snake = Snake(body)
        game.state.direction = LEFT
        game.state.pending_direction = LEFT
        game.submit_direction(DOWN)

        clock.now = 150
        game.tick()

        assert game.phase == GAME_OVER
        assert list(game.state.snake.positions) == body

    def test_pause_resume_does_not_leak_time(self):
        game, clock = started_game()
        game.state.food = (0, 0)

        clock.now = 100
        game.pause()
        clock.now = 10_000
        assert not game.tick()
        game.resume()

        clock.now = 10_100
        assert not game.tick()
        clock.now = 10_150
        assert game.tick()
        assert list(game.state.snake.positions) == [(13, 9)]

    def test_immediate_pause_resume_adds_no_steps(self):
        game, clock = started_game()
        game.state.food = (0, 0)
        clock.now = 149
        game.pause()
        game.resume()

        assert not game.tick()
        assert list(game.state.snake.positions) == [(12, 9)]

    def test_stop_is_idempotent_and_blocks_steps(self):
        game, clock = started_game()
        game.stop()
        game.stop()

        clock.now = 1000
        assert not game.tick()
        assert game.phase == PLAYING

    def test_resume_rearms_stopped_loop(self):
        game, clock = started_game()
        game.state.food = (0, 0)
        game.stop()
        clock.now = 1000
        assert game.resume()

        clock.now = 1150
        assert game.tick()

    def test_resume_is_noop_while_running(self):
        game, _ = started_game()
        assert not game.resume()

    def test_renderer_called_every_frame(self):
        renderer = MagicMock()
        game, clock = started_game(renderer=renderer)
        game.state.food = (0, 0)
        renderer.reset_mock()

        clock.now = 10
        game.tick()
        clock.now = 150
        game.tick()

        assert renderer.call_count == 2
        snapshot = renderer.call_args[0][0]
        assert snapshot.snake_positions == [(13, 9)]

    def test_renderer_failure_does_not_stop_game(self):
        renderer = MagicMock(side_effect=RuntimeError("no display"))
        game, clock = started_game(renderer=renderer)
        game.state.food = (0, 0)

        clock.now = 150
        assert game.tick()
        assert game.phase == PLAYING


class TestInput:
    """Tests for directional input through the controller."""

    def test_direction_on_start_screen_starts_game(self):
        game, _ = make_game()
        assert not game.submit_direction(UP)
        assert game.phase == PLAYING
        assert game.state.pending_direction == RIGHT

    def test_invalid_direction_on_start_screen_is_ignored(self):
        game, _ = make_game()
        assert not game.submit_direction("sideways")
        assert game.phase == START

    def test_direction_ignored_while_paused(self):
        game, _ = started_game()
        game.pause()
        assert not game.submit_direction(UP)
        assert game.state.pending_direction == RIGHT

    def test_case_insensitive(self):
        game, _ = started_game()
        assert game.submit_direction("up")
        assert game.state.pending_direction == UP

    def test_reversal_rejected_for_long_snake(self):
        game, _ = started_game()
        game.state.snake = Snake([(12, 9), (11, 9)])
        assert not game.submit_direction(LEFT)
        assert game.state.pending_direction == RIGHT


class TestGameOverAndHighScore:
    """Tests for game-over bookkeeping and events."""

    def test_new_high_score_saved(self):
        store = MagicMock()
        store.load.return_value = 30
        game, clock = started_game(store=store)
        game.state.score = 40

        force_wall_collision(game, clock)

        store.save.assert_called_once_with(40)
        assert game.high_score == 40
        assert game.get_current_state().new_high_score is True

    def test_lower_score_not_saved(self):
        store = MagicMock()
        store.load.return_value = 30
        game, clock = started_game(store=store)
        game.state.score = 20

        force_wall_collision(game, clock)

        store.save.assert_not_called()
        assert game.high_score == 30
        assert game.get_current_state().new_high_score is False

    def test_equal_score_is_not_a_new_high_score(self):
        store = MagicMock()
        store.load.return_value = 30
        game, clock = started_game(store=store)
        game.state.score = 30

        force_wall_collision(game, clock)

        store.save.assert_not_called()
        assert not game.new_high_score

    def test_save_failure_is_neutralized(self):
        store = MagicMock()
        store.load.return_value = 0
        store.save.side_effect = OSError("read-only")
        game, clock = started_game(store=store)
        game.state.score = 10

        force_wall_collision(game, clock)

        assert game.phase == GAME_OVER
        assert game.high_score == 10

    def test_restart_after_game_over(self):
        game, clock = started_game()
        game.state.score = 60
        force_wall_collision(game, clock)

        assert game.restart()
        state = game.get_current_state()
        assert state.phase == PLAYING
        assert state.score == 0
        assert state.level == 1
        assert state.tick_interval_ms == 150
        assert state.snake_positions == [(12, 9)]
        assert state.new_high_score is False
        assert game.running

    def test_events_published(self):
        received = []
        game, clock = started_game()
        game.events.subscribe(received.append)

        game.state.score = 40
        game.state.food = (13, 9)
        clock.now = 150
        game.tick()
        force_wall_collision(game, clock)

        names = [event.name for event in received]
        assert names == [
            events.FOOD_EATEN,
            events.LEVEL_UP,
            events.GAME_OVER,
            events.NEW_HIGH_SCORE,
        ]
        game_over = received[2]
        assert game_over.reason == "wall"
        assert game_over.score == 50

    def test_failing_listener_does_not_affect_game(self):
        game, clock = started_game()
        game.events.subscribe(MagicMock(side_effect=RuntimeError("no audio")))
        game.state.food = (13, 9)

        clock.now = 150
        assert game.tick()
        assert game.state.score == 10
        assert game.phase == PLAYING

    def test_unsubscribe(self):
        listener = MagicMock()
        game, clock = started_game()
        game.events.subscribe(listener)
        game.events.unsubscribe(listener)
        force_wall_collision(game, clock)
        listener.assert_not_called()


class TestInvariants:
    """Long autopilot runs keep the state invariants."""

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_invariants_hold_over_many_ticks(self, seed):
        game, clock = started_game(seed=seed, config=GameConfig(canvas_width=200, canvas_height=160))
        player = GreedyPlayer(rng=random.Random(seed))

        for _ in range(2000):
            if game.phase == GAME_OVER:
                game.restart()

            before = len(game.state.snake)
            score_before = game.state.score
            game.submit_direction(player.get_move(game.get_current_state()))
            clock.now += game.state.tick_interval_ms
            game.tick()

            state = game.get_current_state()
            assert state.length >= 1
            assert all(game.grid.in_bounds(cell) for cell in state.snake_positions)
            assert len(set(state.snake_positions)) == state.length
            assert state.level == state.score // 50 + 1

            if state.phase == GAME_OVER:
                assert state.length == before
            elif state.score > score_before:
                assert state.length == before + 1
            else:
                assert state.length == before
