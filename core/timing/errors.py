from __future__ import annotations


class StopwatchError(Exception):
    """Base class for stopwatch and registry failures."""


class InvalidStateError(StopwatchError, RuntimeError):
    """Raised when start/lap/stop is called in the wrong running state."""


class InvalidArgumentError(StopwatchError, ValueError):
    """Raised by the registry for empty or duplicate stopwatch ids."""


__all__ = ["StopwatchError", "InvalidStateError", "InvalidArgumentError"]
