"""
Game phase controller.

Owns the EngineState and is the only thing that mutates it. Lifecycle
actions that do not apply to the current phase are silent no-ops.

    start ──start()──> playing <──resume()── paused
                         │  └────pause()────────^
                         │ collision
                         v
                      gameOver ──restart()──> playing
"""

import logging
import random
import time
from typing import Callable, Optional, Any

from config import GameConfig
from domain.constants import START, PLAYING, PAUSED, GAME_OVER
from domain.game_state import GameState
from . import events
from .events import GameEvent, EventDispatcher
from .input_buffer import parse_direction, submit_direction
from .loop import TickClock
from .simulation import step, StepOutcome
from .state import new_state

logger = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameController:
    """
    Drives one game instance.

    Args:
        config: game settings (defaults to GameConfig())
        rng: random source for food placement; pass random.Random(seed) for replays
        high_score_store: object with load() -> int and save(score); optional
        clock: callable returning the current time in milliseconds
        renderer: called with a GameState snapshot on every frame

    Raises:
        GridConfigurationError: if the configured canvas holds no whole cell
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        high_score_store: Optional[Any] = None,
        clock: Optional[Callable[[], float]] = None,
        renderer: Optional[Callable[[GameState], None]] = None
    ):
        self.config = config or GameConfig()
        self.config.validate()
        self.grid = self.config.grid()
        self.rng = rng or random.Random()
        self.events = EventDispatcher()
        self._store = high_score_store
        self._clock = clock or _monotonic_ms
        self._renderer = renderer
        self._tick_clock = TickClock()
        self._anchor_pending = False

        self.high_score = self._load_high_score()
        self.new_high_score = False
        self.state = new_state(self.grid, self.config, self.rng)
        logger.info(f"Snake game initialized on a {self.grid.width}x{self.grid.height} grid")
        self._render()

    @property
    def phase(self) -> str:
        return self.state.phase

    @property
    def running(self) -> bool:
        return self._tick_clock.running

    # -------------------------------------------------------------------------
    # Lifecycle actions
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Replace the state with a fresh game in the start phase."""
        self._tick_clock.stop()
        self.state = new_state(self.grid, self.config, self.rng)
        self.new_high_score = False
        logger.debug(f"Snake initial position: {self.state.snake.head}, food position: {self.state.food}")
        self._render()

    def start(self, now: Optional[float] = None) -> bool:
        if self.phase != START:
            return False
        logger.info("Starting game...")
        self._begin(now)
        return True

    def pause(self) -> bool:
        if self.phase != PLAYING:
            return False
        logger.info("Pausing game...")
        self.state.phase = PAUSED
        self._tick_clock.stop()
        return True

    def resume(self, now: Optional[float] = None) -> bool:
        """
        Leave the paused phase, or re-arm a loop that was stopped mid-game.

        Elapsed time is re-anchored at resume so the paused interval never
        counts toward the next tick.
        """
        if self.phase == PLAYING and self.running:
            return False
        if self.phase not in (PAUSED, PLAYING):
            return False
        logger.info("Resuming game...")
        self.state.phase = PLAYING
        self._arm(now)
        return True

    def toggle_pause(self, now: Optional[float] = None) -> bool:
        if self.phase == PLAYING:
            return self.pause()
        if self.phase == PAUSED:
            return self.resume(now)
        return False

    def restart(self, now: Optional[float] = None) -> bool:
        """Reset and immediately play again; only available after a game over."""
        if self.phase != GAME_OVER:
            return False
        logger.info("Restarting game...")
        self._begin(now)
        return True

    def on_visibility_change(self, hidden: bool) -> bool:
        """Pause a running game when the display goes out of view."""
        if hidden and self.phase == PLAYING:
            return self.pause()
        return False

    def stop(self) -> None:
        """Cancel the driving loop. Idempotent; resume() re-arms it."""
        self._tick_clock.stop()

    def _begin(self, now: Optional[float] = None) -> None:
        self.reset()
        self.state.phase = PLAYING
        self._arm(now)

    def _arm(self, now: Optional[float]) -> None:
        """
        Start the tick clock.

        Without a driver timestamp the clock is anchored on the controller's
        own clock, and re-anchored on the first timestamp tick() receives,
        since a driver may count time from a different origin.
        """
        if now is None:
            self._tick_clock.start(self._clock())
            self._anchor_pending = True
        else:
            self._tick_clock.start(now)
            self._anchor_pending = False

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def submit_direction(self, direction: Any) -> bool:
        """
        Buffer a directional intent ('up', 'DOWN', ...).

        On the start screen a valid direction starts the game instead.

        Returns:
            True if the direction will be applied on the next tick
        """
        parsed = parse_direction(direction)
        if parsed is None:
            return False
        if self.phase == START:
            self.start()
            return False
        return submit_direction(self.state, parsed)

    # -------------------------------------------------------------------------
    # Frame loop
    # -------------------------------------------------------------------------

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Frame callback for the external driver.

        Runs at most one simulation step when a full tick interval has
        elapsed, then renders whether or not a step happened.

        Returns:
            True if a simulation step ran
        """
        if self.phase != PLAYING or not self.running:
            return False

        if now is None:
            now = self._clock()
        elif self._anchor_pending:
            self._tick_clock.start(now)
        self._anchor_pending = False

        stepped = False
        if self._tick_clock.due(now, self.state.tick_interval_ms):
            self._step()
            stepped = True

        self._render()
        return stepped

    def _step(self) -> StepOutcome:
        outcome = step(self.state, self.grid, self.config, self.rng)

        if outcome.fatal:
            self._game_over(outcome.kind)
        elif outcome.ate:
            self._publish(events.FOOD_EATEN)
            if outcome.leveled_up:
                self._publish(events.LEVEL_UP)

        return outcome

    def _game_over(self, reason: str) -> None:
        self.state.phase = GAME_OVER
        self._tick_clock.stop()
        logger.info(f"Game over! Score: {self.state.score} ({reason} collision)")

        self.new_high_score = self.state.score > self.high_score
        if self.new_high_score:
            self.high_score = self.state.score
            self._save_high_score()

        self._publish(events.GAME_OVER, reason=reason)
        if self.new_high_score:
            self._publish(events.NEW_HIGH_SCORE)

    # -------------------------------------------------------------------------
    # Collaborators
    # -------------------------------------------------------------------------

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current game as a GameState.
        """
        return GameState(
            phase=self.state.phase,
            snake_positions=list(self.state.snake.positions),
            direction=self.state.direction,
            pending_direction=self.state.pending_direction,
            food=self.state.food,
            score=self.state.score,
            high_score=self.high_score,
            level=self.state.level,
            tick_interval_ms=self.state.tick_interval_ms,
            initial_tick_ms=self.config.initial_tick_ms,
            width=self.grid.width,
            height=self.grid.height,
            new_high_score=self.new_high_score
        )

    def _publish(self, name: str, reason: Optional[str] = None) -> None:
        self.events.publish(GameEvent(
            name,
            score=self.state.score,
            level=self.state.level,
            length=len(self.state.snake),
            reason=reason
        ))

    def _render(self) -> None:
        if self._renderer is None:
            return
        try:
            self._renderer(self.get_current_state())
        except Exception as e:
            logger.warning(f"Renderer failed: {e}")

    def _load_high_score(self) -> int:
        if self._store is None:
            return 0
        try:
            score = int(self._store.load() or 0)
        except Exception as e:
            logger.warning(f"Could not load high score: {e}")
            return 0
        return max(score, 0)

    def _save_high_score(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save(self.high_score)
        except Exception as e:
            logger.warning(f"Could not save high score: {e}")
