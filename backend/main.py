import argparse
import json
import logging
import random
from typing import Dict, Any, Optional

from dotenv import load_dotenv

from config import GameConfig
from data_access import HighScoreStore
from domain.constants import PLAYING
from domain.game_state import GameState
from engine import GameController
from players import get_player_class, AVAILABLE_VARIANTS
from services.webhook_service import ScoreSubmitter

load_dotenv()


class VirtualClock:
    """Millisecond clock that only moves when told to, for headless runs."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


def print_board(state: GameState):
    """
    Prints a visual representation of the current board state.
    """
    print(f"\nScore: {state.score}  Level: {state.level}  Speed: {state.speed:.1f}x  Length: {state.length}")
    print(state.print_board() + "\n")


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(game_params: argparse.Namespace, store: Optional[Any] = None) -> Dict[str, Any]:
    """
    Runs a single headless game with an autopilot player.

    Args:
        game_params: An object (like argparse.Namespace) containing the run settings
                     (seed, max_ticks, player, player_name, show_board, submit).
        store: High score store; defaults to the SQLite-backed HighScoreStore.

    Returns:
        A dictionary summarizing the game (final_score, level, length, ticks,
        high_score, new_high_score).
    """
    seed = getattr(game_params, 'seed', None)
    clock = VirtualClock()
    renderer = print_board if getattr(game_params, 'show_board', False) else None

    game = GameController(
        config=GameConfig.from_env(),
        rng=random.Random(seed),
        high_score_store=store if store is not None else HighScoreStore(),
        clock=clock,
        renderer=renderer
    )

    if getattr(game_params, 'submit', False):
        game.events.subscribe(ScoreSubmitter(
            getattr(game_params, 'player_name', None),
            game.config.points_per_food
        ))

    player_class = get_player_class(getattr(game_params, 'player', None))
    player = player_class(rng=random.Random(seed))

    game.start()

    ticks = 0
    max_ticks = getattr(game_params, 'max_ticks', 10_000)
    while game.phase == PLAYING and ticks < max_ticks:
        game.submit_direction(player.get_move(game.get_current_state()))
        clock.advance(game.state.tick_interval_ms)
        if game.tick():
            ticks += 1

    game.stop()

    final = game.get_current_state()
    if final.phase == PLAYING:
        print(f"Stopped after reaching the tick limit ({max_ticks}).")

    return {
        "final_score": final.score,
        "level": final.level,
        "length": final.length,
        "ticks": ticks,
        "high_score": final.high_score,
        "new_high_score": final.new_high_score
    }


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Run a headless snake game with an autopilot player."
    )
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Seed for food placement and the autopilot")
    parser.add_argument("--max-ticks", dest="max_ticks", type=int, required=False, default=10_000,
                        help="Stop after this many simulation steps")
    parser.add_argument("--player", choices=AVAILABLE_VARIANTS, default="random",
                        help="Autopilot variant")
    parser.add_argument("--player-name", dest="player_name", type=str, default=None,
                        help="Name used for leaderboard submission")
    parser.add_argument("--submit", action="store_true",
                        help="Submit the final score to SNAKE_WEBHOOK_URL")
    parser.add_argument("--show-board", dest="show_board", action="store_true",
                        help="Print the board on every frame")
    parser.add_argument("--log-level", dest="log_level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity")

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level))

    result = run_simulation(args)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
