"""
Webhook service for sending game notifications to external services.

This module handles posting game-over scores to a leaderboard webhook.
Score submission is opt-in (SNAKE_WEBHOOK_URL) and never affects the game:
every failure is logged and reported as False.

Submitted data is checked before it leaves the process: player names are
restricted to a safe character set, scores must be reachable by the game
rules, and when SNAKE_WEBHOOK_SECRET is set the body carries an
HMAC-SHA256 signature so the receiver can reject forged submissions.
"""

import hashlib
import hmac
import json
import logging
import os
import re
from datetime import datetime, timezone
from typing import Dict, Any, Optional

import requests

from engine import events
from engine.events import GameEvent

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Snake-Signature"
ANONYMOUS = "anonymous"
_NAME_PATTERN = re.compile(r"^[A-Za-z0-9 _-]{1,32}$")


def sanitize_player_name(name: Optional[str]) -> str:
    """Return the trimmed name if it is 1-32 safe characters, else 'anonymous'."""
    if not name:
        return ANONYMOUS
    name = name.strip()
    if not _NAME_PATTERN.match(name):
        return ANONYMOUS
    return name


def is_valid_score(score: Any, points_per_food: int) -> bool:
    if isinstance(score, bool) or not isinstance(score, int):
        return False
    return score >= 0 and score % points_per_food == 0


def sign_payload(body: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def send_webhook(url: str, data: Dict[str, Any], timeout: int = 10,
                 secret: Optional[str] = None) -> bool:
    """
    Send a POST request with JSON data to a webhook URL.

    Args:
        url: The webhook URL to send data to
        data: Dictionary of data to send as JSON
        timeout: Request timeout in seconds (default: 10)
        secret: If given, sign the body with HMAC-SHA256

    Returns:
        True if webhook was sent successfully, False otherwise
    """
    if not url:
        logger.warning("No webhook URL provided, skipping webhook")
        return False

    body = json.dumps(data, sort_keys=True).encode("utf-8")
    headers = {'Content-Type': 'application/json'}
    if secret:
        headers[SIGNATURE_HEADER] = sign_payload(body, secret)

    try:
        response = requests.post(
            url,
            data=body,
            timeout=timeout,
            headers=headers
        )
        response.raise_for_status()
        logger.info(f"Webhook sent successfully to {url}")
        return True

    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to send webhook to {url}: {e}")
        return False


def send_score_webhook(
    player_name: Optional[str],
    score: int,
    level: int,
    length: int,
    points_per_food: int,
    webhook_url: Optional[str] = None,
    secret: Optional[str] = None
) -> bool:
    """
    Send a leaderboard submission when a game ends.

    Args:
        player_name: Display name; replaced by 'anonymous' if unsafe
        score: Final score
        level: Level reached
        length: Final snake length
        points_per_food: Used to reject scores the rules cannot produce
        webhook_url: Override webhook URL (defaults to SNAKE_WEBHOOK_URL env var)
        secret: Override signing secret (defaults to SNAKE_WEBHOOK_SECRET env var)

    Returns:
        True if webhook was sent successfully, False otherwise
    """
    url = webhook_url or os.getenv('SNAKE_WEBHOOK_URL')

    if not url:
        logger.info("No webhook URL configured, skipping score submission")
        return False

    if not is_valid_score(score, points_per_food):
        logger.warning(f"Refusing to submit impossible score {score!r}")
        return False

    payload = {
        'event': 'game_over',
        'timestamp': datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        'player': sanitize_player_name(player_name),
        'score': score,
        'level': level,
        'length': length,
    }

    logger.info(f"Sending score webhook for {payload['player']}: {score}")
    return send_webhook(url, payload, secret=secret or os.getenv('SNAKE_WEBHOOK_SECRET'))


class ScoreSubmitter:
    """
    Event listener that submits the final score on every game over.

    Usage:
        game.events.subscribe(ScoreSubmitter("ada", game.config.points_per_food))
    """

    def __init__(self, player_name: Optional[str], points_per_food: int,
                 webhook_url: Optional[str] = None, secret: Optional[str] = None):
        self.player_name = player_name
        self.points_per_food = points_per_food
        self.webhook_url = webhook_url
        self.secret = secret

    def __call__(self, event: GameEvent) -> None:
        if event.name != events.GAME_OVER:
            return
        send_score_webhook(
            self.player_name,
            event.score,
            event.level,
            event.length,
            self.points_per_food,
            webhook_url=self.webhook_url,
            secret=self.secret
        )
