"""
Discrete game events for fire-and-forget collaborators (audio, telemetry,
leaderboards).
"""

import logging
from typing import Callable, Dict, Any, List, Optional

logger = logging.getLogger(__name__)

FOOD_EATEN = "food_eaten"
LEVEL_UP = "level_up"
GAME_OVER = "game_over"
NEW_HIGH_SCORE = "new_high_score"


class GameEvent:
    """
    Attributes:
        name: one of food_eaten, level_up, game_over, new_high_score
        score, level, length: figures at the moment of the event
        reason: collision reason for game_over ('wall' or 'self')
    """

    def __init__(self, name: str, score: int, level: int, length: int, reason: Optional[str] = None):
        self.name = name
        self.score = score
        self.level = level
        self.length = length
        self.reason = reason

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.name,
            "score": self.score,
            "level": self.level,
            "length": self.length,
            "reason": self.reason,
        }

    def __repr__(self):
        return f"<GameEvent {self.name} score={self.score} level={self.level}>"


Listener = Callable[[GameEvent], None]


class EventDispatcher:
    """Delivers events to listeners; a failing listener never reaches the engine."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.warning(f"Listener {listener!r} failed on {event.name}: {e}")
