"""
Scoring, leveling and speed progression.

Level and tick interval are pure functions of the score, so they are
re-derived after every scoring event instead of being tracked separately.
"""

from config import GameConfig


def level_for_score(score: int, level_up_points: int) -> int:
    return score // level_up_points + 1


def tick_interval_for_level(level: int, initial_tick_ms: float,
                            speed_increment_ms: float, min_tick_ms: float) -> float:
    """Each level shaves speed_increment_ms off the interval, never below min_tick_ms."""
    return max(initial_tick_ms - (level - 1) * speed_increment_ms, min_tick_ms)


def award_food(state, config: GameConfig) -> bool:
    """
    Add the points for one eaten food and re-derive level and speed.

    Returns:
        True if the level went up
    """
    state.score += config.points_per_food
    new_level = level_for_score(state.score, config.level_up_points)
    if new_level <= state.level:
        return False

    state.level = new_level
    state.tick_interval_ms = tick_interval_for_level(
        new_level,
        config.initial_tick_ms,
        config.speed_increment_ms,
        config.min_tick_ms
    )
    return True
