"""Thread-safe lap stopwatch.

A :class:`Stopwatch` records integer millisecond lap durations.  Calling
``start`` again after ``stop`` resumes the watch: the lap recorded by ``stop``
is taken back off the list and kept as a carry-over, so the next ``lap`` (or
``stop``) records ``carry-over + time since resume`` and the paused interval is
never counted.
"""

from __future__ import annotations

import functools
import logging
from threading import Lock
from typing import Callable, List, Optional

from core.snapshots import StopwatchSnapshot
from core.timing.errors import InvalidStateError
from sdk.ids import now_monotonic_ms

logger = logging.getLogger(__name__)

Clock = Callable[[], int]


@functools.total_ordering
class Stopwatch:
    """Named stopwatch; every mutator runs under the instance lock."""

    def __init__(self, stopwatch_id: str, clock: Optional[Clock] = None) -> None:
        self._id = stopwatch_id
        self._clock: Clock = clock or now_monotonic_ms
        self._lock = Lock()
        self._running = False
        self._start_time: Optional[int] = None
        self._latest_mark: Optional[int] = None
        self._carry_over: Optional[int] = None
        self._lap_times: List[int] = []

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def id(self) -> str:
        return self._id

    def get_id(self) -> str:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stopwatch):
            return NotImplemented
        return self._id == other._id

    def __lt__(self, other: "Stopwatch") -> bool:
        if not isinstance(other, Stopwatch):
            return NotImplemented
        return self._id < other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return f"Stopwatch {self._id}"

    def __repr__(self) -> str:
        return f"Stopwatch(id={self._id!r}, running={self._running})"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        with self._lock:
            if self._running:
                logger.debug("start rejected for %s: already running", self._id)
                raise InvalidStateError(f"stopwatch {self._id!r} is already running")
            if self._start_time is not None:
                # Resuming after stop: the lap recorded by stop is provisional.
                self._carry_over = self._lap_times.pop()
            self._running = True
            self._start_time = self._clock()
            self._latest_mark = None
            logger.debug("started %s (carry_over=%s)", self._id, self._carry_over)

    def lap(self) -> int:
        with self._lock:
            if not self._running:
                logger.debug("lap rejected for %s: not running", self._id)
                raise InvalidStateError(f"stopwatch {self._id!r} is not running")
            now = self._clock()
            duration = self._current_lap(now)
            self._carry_over = None
            self._lap_times.append(duration)
            self._latest_mark = now
            logger.debug("lap %d for %s: %d ms", len(self._lap_times), self._id, duration)
            return duration

    def stop(self) -> int:
        with self._lock:
            if not self._running:
                logger.debug("stop rejected for %s: not running", self._id)
                raise InvalidStateError(f"stopwatch {self._id!r} is not running")
            now = self._clock()
            duration = self._current_lap(now)
            self._lap_times.append(duration)
            self._running = False
            logger.debug("stopped %s: final lap %d ms", self._id, duration)
            return duration

    def reset(self) -> None:
        with self._lock:
            self._running = False
            self._start_time = None
            self._latest_mark = None
            self._carry_over = None
            self._lap_times.clear()
            logger.debug("reset %s", self._id)

    def _current_lap(self, now: int) -> int:
        # Caller holds the lock and has checked that the watch is running.
        assert self._start_time is not None
        if self._carry_over is not None:
            return now - self._start_time + self._carry_over
        if self._latest_mark is None:
            return now - self._start_time
        return now - self._latest_mark

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def lap_times(self) -> List[int]:
        with self._lock:
            return list(self._lap_times)

    def get_lap_times(self) -> List[int]:
        return self.lap_times

    def snapshot(self) -> StopwatchSnapshot:
        with self._lock:
            laps = list(self._lap_times)
            return StopwatchSnapshot(
                id=self._id,
                running=self._running,
                lap_times_ms=laps,
                total_ms=sum(laps),
            )


__all__ = ["Clock", "Stopwatch"]
