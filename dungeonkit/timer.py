"""Frame timing from a high-resolution counter."""

from __future__ import annotations

import time
from typing import Callable


class TimeManager:
    """Measures the time between successive frames.

    ``clock`` returns a monotonically increasing tick count and ``frequency``
    is the number of ticks per second.
    """

    def __init__(
        self,
        clock: Callable[[], int] = time.perf_counter_ns,
        frequency: int = 1_000_000_000,
    ) -> None:
        if frequency <= 0:
            raise ValueError("frequency must be positive")
        self._clock = clock
        self._frequency = frequency
        self._cur_time = 0
        self._old_time = 0
        self._origin_time = 0
        self._cpu_tick = 0
        self.time_delta = 0.0

    def initialize(self) -> None:
        """Start measuring from the current tick."""
        self._cur_time = self._clock()
        self._old_time = self._clock()
        self._origin_time = self._clock()
        self._cpu_tick = self._frequency

    def update(self) -> float:
        """Advance one frame and return the seconds elapsed since the last one."""
        if self._cpu_tick == 0:
            raise RuntimeError("initialize() must be called before update()")
        self._cur_time = self._clock()
        if self._cur_time - self._origin_time > self._cpu_tick:
            self._cpu_tick = self._frequency
            self._origin_time = self._cur_time
        self.time_delta = (self._cur_time - self._old_time) / self._cpu_tick
        self._old_time = self._cur_time
        return self.time_delta