"""Serialisable views of stopwatch state."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class StopwatchSnapshot(BaseModel):
    """Point-in-time copy of a stopwatch, taken under its lock."""

    id: str
    running: bool = False
    lap_times_ms: List[int] = Field(default_factory=list)
    total_ms: int = 0


def snapshot_dump(snapshot: StopwatchSnapshot) -> Dict[str, Any]:
    """Return a plain ``dict`` for ``snapshot`` under pydantic v1 or v2."""

    if hasattr(snapshot, "model_dump"):
        return snapshot.model_dump()  # type: ignore[return-value]
    return snapshot.dict()  # type: ignore[return-value]


__all__ = ["StopwatchSnapshot", "snapshot_dump"]
