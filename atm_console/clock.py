"""
Clock Module

Time source used to stamp transaction entries. Production code uses the
local wall clock; tests inject a FixedClock for deterministic timestamps.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional


class Clock(ABC):
    """Abstract interface for time sources"""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time"""
        pass


class SystemClock(Clock):
    """Local wall-clock time, as printed on statements"""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """
    Deterministic clock for tests

    Returns `start`, then moves forward by `step` on every call when a
    step is given.
    """

    def __init__(self, start: datetime, step: Optional[timedelta] = None):
        self._current = start
        self._step = step

    def now(self) -> datetime:
        current = self._current
        if self._step:
            self._current = self._current + self._step
        return current

