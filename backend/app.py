import os
import random
import logging
import threading
import uuid
from collections import OrderedDict
from typing import Optional, Tuple

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from config import GameConfig
from data_access import HighScoreStore, get_high_score
from engine import GameController
from engine.controls import handle_key, handle_overlay_click, handle_swipe

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

# Enable CORS for API routes so a browser front end (different origin) can call Flask
# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

ACTIONS = ("start", "pause", "resume", "restart", "toggle_pause")
DEFAULT_MAX_GAMES = 100


class GameSession:
    """A game plus the lock that serializes requests against it."""

    def __init__(self, game: GameController):
        self.game = game
        self.lock = threading.Lock()


class GameRegistry:
    """
    In-process table of independent games keyed by id.

    Holds at most max_games sessions; creating one more evicts the session
    that was used least recently.
    """

    def __init__(self, max_games: int = DEFAULT_MAX_GAMES):
        if max_games < 1:
            raise ValueError(f"max_games must be at least 1, got {max_games}")
        self.max_games = max_games
        self._sessions: "OrderedDict[str, GameSession]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self, seed: Optional[int] = None) -> Tuple[str, GameSession]:
        session = GameSession(GameController(
            config=GameConfig.from_env(),
            rng=random.Random(seed),
            high_score_store=HighScoreStore()
        ))
        game_id = str(uuid.uuid4())
        evicted = []
        with self._lock:
            while len(self._sessions) >= self.max_games:
                evicted.append(self._sessions.popitem(last=False))
            self._sessions[game_id] = session

        for old_id, old in evicted:
            logging.info(f"Evicting idle game {old_id}")
            old.game.stop()
        return game_id, session

    def get(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            session = self._sessions.get(game_id)
            if session is not None:
                self._sessions.move_to_end(game_id)
            return session

    def remove(self, game_id: str) -> bool:
        with self._lock:
            session = self._sessions.pop(game_id, None)
        if session is None:
            return False
        session.game.stop()
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, game_id: str) -> bool:
        with self._lock:
            return game_id in self._sessions


games = GameRegistry(int(os.getenv("SNAKE_MAX_GAMES", DEFAULT_MAX_GAMES)))


def _not_found(game_id: str):
    return jsonify({"error": f"Game '{game_id}' not found"}), 404


def _json_body() -> Optional[dict]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else None


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@app.route("/api/games", methods=["POST"])
def create_game():
    """
    Create a new game in the start phase.

    Body (optional): {"seed": int}
    """
    body = _json_body() or {}
    seed = body.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        return jsonify({"error": "seed must be an integer"}), 400

    try:
        game_id, session = games.create(seed)
    except ValueError as error:
        logging.error(f"Invalid game configuration: {error}")
        return jsonify({"error": f"Invalid game configuration: {error}"}), 500

    return jsonify({"id": game_id, "state": session.game.get_current_state().to_dict()}), 201


@app.route("/api/games/<game_id>", methods=["GET"])
def get_game(game_id):
    session = games.get(game_id)
    if session is None:
        return _not_found(game_id)
    with session.lock:
        state = session.game.get_current_state().to_dict()
    return jsonify({"id": game_id, "state": state})


@app.route("/api/games/<game_id>", methods=["DELETE"])
def delete_game(game_id):
    if not games.remove(game_id):
        return _not_found(game_id)
    return "", 204


@app.route("/api/games/<game_id>/actions/<action>", methods=["POST"])
def game_action(game_id, action):
    """
    Apply a lifecycle action: start, pause, resume, restart or toggle_pause.

    Actions that do not apply to the current phase are accepted and change nothing.
    """
    if action not in ACTIONS:
        return jsonify({"error": f"Unknown action '{action}'. Available actions: {', '.join(ACTIONS)}"}), 400

    session = games.get(game_id)
    if session is None:
        return _not_found(game_id)

    with session.lock:
        applied = getattr(session.game, action)()
        state = session.game.get_current_state().to_dict()

    return jsonify({"applied": applied, "state": state})


@app.route("/api/games/<game_id>/direction", methods=["POST"])
def submit_direction(game_id):
    """
    Buffer a direction for the next tick.

    Body: {"direction": "up" | "down" | "left" | "right"}
    """
    body = _json_body()
    if body is None or "direction" not in body:
        return jsonify({"error": "Request body must be JSON with a 'direction' field"}), 400

    session = games.get(game_id)
    if session is None:
        return _not_found(game_id)

    with session.lock:
        accepted = session.game.submit_direction(body["direction"])
        state = session.game.get_current_state().to_dict()

    return jsonify({"accepted": accepted, "state": state})


@app.route("/api/games/<game_id>/keys", methods=["POST"])
def press_key(game_id):
    """
    Apply a key press using KeyboardEvent.code names.

    Body: {"code": "ArrowUp" | "KeyW" | "Space" | "Enter" | "Escape" | ...}
    """
    body = _json_body()
    if body is None or not isinstance(body.get("code"), str):
        return jsonify({"error": "Request body must be JSON with a 'code' string"}), 400

    session = games.get(game_id)
    if session is None:
        return _not_found(game_id)

    with session.lock:
        handled = handle_key(session.game, body["code"])
        state = session.game.get_current_state().to_dict()

    return jsonify({"handled": handled, "state": state})


@app.route("/api/games/<game_id>/swipe", methods=["POST"])
def swipe(game_id):
    """
    Steer with a touch gesture, given as the displacement from touch start to end.

    Body: {"dx": number, "dy": number}
    """
    body = _json_body()
    if body is None or not _is_number(body.get("dx")) or not _is_number(body.get("dy")):
        return jsonify({"error": "Request body must be JSON with numeric 'dx' and 'dy'"}), 400

    session = games.get(game_id)
    if session is None:
        return _not_found(game_id)

    with session.lock:
        accepted = handle_swipe(session.game, body["dx"], body["dy"])
        state = session.game.get_current_state().to_dict()

    return jsonify({"accepted": accepted, "state": state})


@app.route("/api/games/<game_id>/overlay", methods=["POST"])
def click_overlay(game_id):
    """Click on the start, pause or game-over overlay."""
    session = games.get(game_id)
    if session is None:
        return _not_found(game_id)

    with session.lock:
        applied = handle_overlay_click(session.game)
        state = session.game.get_current_state().to_dict()

    return jsonify({"applied": applied, "state": state})


@app.route("/api/games/<game_id>/visibility", methods=["POST"])
def visibility(game_id):
    """
    Report that the page was hidden or shown. Hiding pauses a running game.

    Body: {"hidden": bool}
    """
    body = _json_body()
    if body is None or not isinstance(body.get("hidden"), bool):
        return jsonify({"error": "Request body must be JSON with a boolean 'hidden'"}), 400

    session = games.get(game_id)
    if session is None:
        return _not_found(game_id)

    with session.lock:
        paused = session.game.on_visibility_change(body["hidden"])
        state = session.game.get_current_state().to_dict()

    return jsonify({"paused": paused, "state": state})


@app.route("/api/games/<game_id>/tick", methods=["POST"])
def tick(game_id):
    """
    Frame callback: runs a simulation step if a tick interval has elapsed
    on the server clock.
    """
    session = games.get(game_id)
    if session is None:
        return _not_found(game_id)

    with session.lock:
        stepped = session.game.tick()
        state = session.game.get_current_state().to_dict()

    return jsonify({"stepped": stepped, "state": state})


@app.route("/api/high-score", methods=["GET"])
def high_score():
    try:
        return jsonify({"high_score": get_high_score()})
    except Exception as error:
        logging.error(f"Error fetching high score: {error}")
        return jsonify({"high_score": 0})


if __name__ == "__main__":
    # Run the Flask app in debug mode.
    app.run(debug=os.getenv("FLASK_DEBUG"))
