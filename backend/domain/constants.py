"""
Game constants for the snake engine.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Unit deltas in screen coordinates: (0, 0) is the top-left cell, y grows downwards
DIRECTION_DELTAS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Game phases
START = "start"
PLAYING = "playing"
PAUSED = "paused"
GAME_OVER = "gameOver"
PHASES = (START, PLAYING, PAUSED, GAME_OVER)

# Collision reasons
WALL = "wall"
SELF = "self"

# Game settings
CANVAS_WIDTH = 480
CANVAS_HEIGHT = 360
CELL_SIZE = 20
INITIAL_TICK_MS = 150
SPEED_INCREMENT_MS = 5
MIN_TICK_MS = 50
POINTS_PER_FOOD = 10
LEVEL_UP_POINTS = 50
MAX_FOOD_ATTEMPTS = 100
MIN_SWIPE_DISTANCE = 30
