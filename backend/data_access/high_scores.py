"""
High score persistence for the game controller.

These functions delegate to the HighScoreRepository for actual database operations.
"""

from typing import Optional

from .repositories import HighScoreRepository, DEFAULT_KEY


class HighScoreStore:
    """
    The controller's persistence collaborator: load() and save(score) for one key.

    Errors propagate; the controller decides how to degrade.
    """

    def __init__(self, key: str = DEFAULT_KEY, db_path: Optional[str] = None,
                 repository: Optional[HighScoreRepository] = None):
        self.key = key
        self.repository = repository or HighScoreRepository(db_path)

    def load(self) -> int:
        return self.repository.get(self.key)

    def save(self, score: int) -> None:
        self.repository.save(score, self.key)


def get_high_score(key: str = DEFAULT_KEY, db_path: Optional[str] = None) -> int:
    """
    Read a stored high score.

    Args:
        key: high score slot
        db_path: override the database file

    Returns:
        The stored score, 0 if none
    """
    return HighScoreRepository(db_path).get(key)


def reset_high_scores(db_path: Optional[str] = None) -> int:
    """
    Delete every stored high score.

    Returns:
        Number of rows deleted
    """
    return HighScoreRepository(db_path).clear()
