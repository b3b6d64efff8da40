"""
Translation of raw UI input (key codes, swipes, overlay clicks) into
controller actions. Key codes follow the DOM KeyboardEvent.code names.
"""

from typing import Optional

from domain.constants import UP, DOWN, LEFT, RIGHT, START, PLAYING, PAUSED, GAME_OVER
from .controller import GameController

KEY_BINDINGS = {
    "ArrowUp": UP,
    "KeyW": UP,
    "ArrowDown": DOWN,
    "KeyS": DOWN,
    "ArrowLeft": LEFT,
    "KeyA": LEFT,
    "ArrowRight": RIGHT,
    "KeyD": RIGHT,
}


def handle_key(game: GameController, code: str) -> bool:
    """
    Apply a key press.

    Returns:
        True if the key is bound to something, whether or not it changed anything
    """
    if code in KEY_BINDINGS:
        game.submit_direction(KEY_BINDINGS[code])
        return True

    if code == "Space":
        if game.phase == START:
            game.start()
        else:
            game.toggle_pause()
        return True

    if code == "Enter":
        if game.phase == GAME_OVER:
            game.restart()
        elif game.phase == START:
            game.start()
        return True

    if code == "Escape":
        handle_escape(game)
        return True

    return False


def handle_escape(game: GameController) -> bool:
    if game.phase == PLAYING:
        return game.pause()
    if game.phase == PAUSED:
        return game.resume()
    return False


def handle_overlay_click(game: GameController) -> bool:
    """A click on the start / pause / game-over overlay advances the game."""
    if game.phase == START:
        return game.start()
    if game.phase == PAUSED:
        return game.resume()
    if game.phase == GAME_OVER:
        return game.restart()
    return False


def resolve_swipe(dx: float, dy: float, min_distance: float) -> Optional[str]:
    """
    Reduce a touch displacement to a direction along its dominant axis.

    Displacements shorter than min_distance on both axes are jitter and
    resolve to None. Equal displacement on both axes counts as vertical.
    """
    abs_x = abs(dx)
    abs_y = abs(dy)

    if max(abs_x, abs_y) < min_distance:
        return None

    if abs_x > abs_y:
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


def handle_swipe(game: GameController, dx: float, dy: float) -> bool:
    """Swipes steer a running game only; they never start or resume one."""
    if game.phase != PLAYING:
        return False
    direction = resolve_swipe(dx, dy, game.config.min_swipe_distance)
    if direction is None:
        return False
    return game.submit_direction(direction)
