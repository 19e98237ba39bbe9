from __future__ import annotations

import time
from datetime import datetime
from typing import Callable

Clock = Callable[[], float]


def system_clock() -> float:
    return time.time()


class FixedClock:
    """A clock pinned to one instant, for tests and token replays."""

    def __init__(self, timestamp: float | datetime) -> None:
        if isinstance(timestamp, datetime):
            timestamp = timestamp.timestamp()
        self.timestamp = float(timestamp)

    def __call__(self) -> float:
        return self.timestamp

    def advance(self, seconds: float) -> "FixedClock":
        return FixedClock(self.timestamp + seconds)
