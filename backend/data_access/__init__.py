"""
Data access layer for snake game database operations.

This module provides high score persistence on top of the repository layer.
"""

from .high_scores import HighScoreStore, get_high_score, reset_high_scores

__all__ = [
    'HighScoreStore',
    'get_high_score',
    'reset_high_scores',
]
