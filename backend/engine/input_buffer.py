"""
Directional input buffering.

Only the most recent legal submission before a tick survives; there is no
queue of intents.
"""

import logging
from typing import Optional, Any

from domain.constants import VALID_MOVES, OPPOSITES, PLAYING
from .state import EngineState

logger = logging.getLogger(__name__)


def parse_direction(value: Any) -> Optional[str]:
    """
    Normalise 'up', 'Up', 'UP', ... to a direction constant.

    Returns None for anything that is not one of the four directions.
    """
    if not isinstance(value, str):
        return None
    direction = value.strip().upper()
    if direction not in VALID_MOVES:
        return None
    return direction


def submit_direction(state: EngineState, direction: str) -> bool:
    """
    Buffer a direction for the next tick.

    Ignored outside the playing phase. A snake longer than one cell may not
    reverse onto the committed direction, since its head would immediately
    hit its own neck.

    Returns:
        True if pending_direction was overwritten
    """
    if state.phase != PLAYING:
        return False
    if direction not in VALID_MOVES:
        return False

    if len(state.snake) > 1 and direction == OPPOSITES[state.direction]:
        logger.debug(f"Rejected reversal from {state.direction} to {direction}")
        return False

    state.pending_direction = direction
    logger.debug(f"Direction changed to: {direction}")
    return True
