"""
Repository layer for database operations.
"""

from .base import BaseRepository
from .high_score_repository import HighScoreRepository, DEFAULT_KEY

__all__ = [
    'BaseRepository',
    'HighScoreRepository',
    'DEFAULT_KEY',
]
