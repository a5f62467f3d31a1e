from __future__ import annotations
from pydantic import BaseModel
from typing import Callable, Literal
import os
from .ids import now_monotonic_ms, now_wall_ms

ClockName = Literal["monotonic", "wall"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_CLOCKS: dict[str, Callable[[], int]] = {"monotonic": now_monotonic_ms, "wall": now_wall_ms}

class AppConfig(BaseModel):
    clock: ClockName = "monotonic"
    log_level: LogLevel = "WARNING"

    def clock_fn(self) -> Callable[[], int]:
        return _CLOCKS[self.clock]

def load_config() -> AppConfig:
    # Read on every call so env changes apply; explicit kwargs so env values go through validation.
    return AppConfig(
        clock=os.getenv('LAPWATCH_CLOCK', 'monotonic'),
        log_level=os.getenv('LAPWATCH_LOG_LEVEL', 'WARNING').upper(),
    )
