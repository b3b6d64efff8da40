"""
Tick gating for a frame-driven loop.

The driver calls in once per frame with a timestamp; the clock decides
whether that frame gets a simulation step.
"""

from typing import Optional


class TickClock:
    """
    Elapsed-time accumulator.

    A step is due once at least one tick interval has passed since the last
    step (or since the clock was started). After a step the base moves to
    the frame's timestamp, so one long frame yields a single step rather
    than a catch-up burst.
    """

    def __init__(self):
        self.running = False
        self.last_time: Optional[float] = None

    def start(self, now: float) -> None:
        """Arm the clock, anchoring elapsed time at now."""
        self.running = True
        self.last_time = now

    def stop(self) -> None:
        """Cancel ticking. Safe to call when already stopped."""
        self.running = False

    def due(self, now: float, interval_ms: float) -> bool:
        if not self.running:
            return False
        if now - self.last_time < interval_ms:
            return False
        self.last_time = now
        return True
