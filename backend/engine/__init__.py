"""
Simulation engine: per-tick update, food placement, input buffering and
the phase controller that drives them.
"""

from .state import EngineState, new_state
from .simulation import step, StepOutcome
from .food import place_food
from .scoring import level_for_score, tick_interval_for_level
from .input_buffer import parse_direction, submit_direction
from .loop import TickClock
from .events import GameEvent, EventDispatcher
from .controller import GameController

__all__ = [
    'EngineState',
    'new_state',
    'step',
    'StepOutcome',
    'place_food',
    'level_for_score',
    'tick_interval_for_level',
    'parse_direction',
    'submit_direction',
    'TickClock',
    'GameEvent',
    'EventDispatcher',
    'GameController',
]
