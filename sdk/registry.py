from __future__ import annotations
import logging
from threading import Lock
from typing import Optional
from core.timing.errors import InvalidArgumentError
from core.timing.stopwatch import Clock, Stopwatch
from .config import load_config

logger = logging.getLogger(__name__)

class StopwatchRegistry:
    """Creates stopwatches by unique id and keeps every one it created.

    Without an explicit ``clock`` the time source comes from ``LAPWATCH_CLOCK``.
    """
    def __init__(self, clock: Optional[Clock] = None):
        self._clock: Clock = clock or load_config().clock_fn()
        self._lock = Lock()
        self._instances: list[Stopwatch] = []
        self._used_ids: set[str] = set()
    def create(self, stopwatch_id: Optional[str]) -> Stopwatch:
        if stopwatch_id is None:
            logger.debug("stopwatch id None rejected")
            raise InvalidArgumentError("stopwatch id cannot be None")
        if not isinstance(stopwatch_id, str):
            logger.debug("non-string stopwatch id %r rejected", stopwatch_id)
            raise InvalidArgumentError(f"stopwatch id must be a string, got {type(stopwatch_id).__name__}")
        if stopwatch_id == "":
            logger.debug("empty stopwatch id rejected")
            raise InvalidArgumentError("stopwatch id cannot be empty")
        with self._lock:
            if stopwatch_id in self._used_ids:
                logger.debug("duplicate stopwatch id %r rejected", stopwatch_id)
                raise InvalidArgumentError(f"stopwatch id {stopwatch_id!r} is already taken")
            sw = Stopwatch(stopwatch_id, clock=self._clock)
            self._used_ids.add(stopwatch_id)
            self._instances.append(sw)
        logger.debug("created stopwatch %r", stopwatch_id)
        return sw
    def list(self) -> list[Stopwatch]:
        with self._lock:
            return list(self._instances)
    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)
    def __contains__(self, stopwatch_id: object) -> bool:
        with self._lock:
            return stopwatch_id in self._used_ids
