"""Frame timing for the garden loop.

``FrameClock`` turns the monotonically increasing timestamps handed out by
the display loop into per-frame deltas. ``PeriodicTimer`` fires a fixed
interval independently of the frame phases (used for the garden day
counter when no pygame timer is available).
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class FrameClock:
    """Converts timestamps into update deltas.

    The first timestamp after construction or ``reset()`` yields a delta of
    0, so a resumed or freshly started garden never sees the whole idle
    period as one frame.

    Attributes:
        max_delta: Optional ceiling for a single delta in ms
    """

    def __init__(self, max_delta: Optional[float] = None) -> None:
        if max_delta is not None and max_delta <= 0:
            raise ValueError("max_delta must be positive")
        self.max_delta = max_delta
        self._last_timestamp: Optional[float] = None
        self._ticks = 0

    @property
    def last_timestamp(self) -> Optional[float]:
        return self._last_timestamp

    @property
    def ticks(self) -> int:
        return self._ticks

    def tick(self, timestamp_ms: float) -> float:
        """Record a timestamp and return ms elapsed since the previous one."""
        self._ticks += 1
        if self._last_timestamp is None:
            self._last_timestamp = timestamp_ms
            return 0.0

        delta = timestamp_ms - self._last_timestamp
        self._last_timestamp = timestamp_ms
        if delta < 0:
            logger.warning("Clock went backwards by %.1fms, using delta 0", -delta)
            return 0.0
        if self.max_delta is not None and delta > self.max_delta:
            return self.max_delta
        return delta

    def reset(self) -> None:
        """Forget the last timestamp; the next tick yields delta 0."""
        self._last_timestamp = None


class PeriodicTimer:
    """Counts how many fixed intervals have elapsed.

    Example:
        days = PeriodicTimer(30000)
        for _ in range(days.advance(delta)):
            engine.advance_day()
    """

    def __init__(self, interval_ms: float) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.interval_ms = interval_ms
        self._accumulated = 0.0
        self.fired = 0

    def advance(self, elapsed_ms: float) -> int:
        """Add elapsed time and return the number of intervals completed."""
        self._accumulated += max(0.0, elapsed_ms)
        count = 0
        while self._accumulated >= self.interval_ms:
            self._accumulated -= self.interval_ms
            count += 1
        self.fired += count
        return count
