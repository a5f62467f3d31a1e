from __future__ import annotations

import json
import logging
import threading
import time
from typing import List, Optional

import typer
from pydantic import ValidationError

from core.snapshots import snapshot_dump
from core.timing.errors import InvalidArgumentError
from sdk.config import load_config
from sdk.ids import new_ulid
from sdk.registry import StopwatchRegistry


app = typer.Typer(add_completion=False, no_args_is_help=True)


def _registry() -> StopwatchRegistry:
    try:
        cfg = load_config()
    except ValidationError as exc:
        typer.echo(f"[lapwatch] invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2)
    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return StopwatchRegistry(clock=cfg.clock_fn())


@app.command()
def run(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Stopwatch id (default: a new ULID)"),
    laps: int = typer.Option(3, min=0, help="Number of laps to record before stopping"),
    interval: float = typer.Option(0.1, min=0.0, help="Seconds between laps"),
    pause: float = typer.Option(0.0, min=0.0, help="Stop/start pause after the first lap, in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print the final snapshot as JSON"),
) -> None:
    """Time a few laps on a fresh stopwatch and print them."""

    registry = _registry()
    sw = registry.create(name or new_ulid())

    sw.start()
    for i in range(laps):
        time.sleep(interval)
        sw.lap()
        if i == 0 and pause > 0:
            # Paused time is excluded from the next recorded lap.
            sw.stop()
            time.sleep(pause)
            sw.start()
    time.sleep(interval)
    sw.stop()

    snap = sw.snapshot()
    if as_json:
        typer.echo(json.dumps(snapshot_dump(snap)))
        return

    typer.echo(f"[lapwatch] {sw}")
    for idx, ms in enumerate(snap.lap_times_ms, start=1):
        typer.echo(f"  lap {idx}: {ms} ms")
    typer.echo(f"  total: {snap.total_ms} ms")


@app.command()
def race(
    name: str = typer.Option("shared", "--name", "-n", help="Id every thread tries to claim"),
    threads: int = typer.Option(8, min=1, help="Number of competing threads"),
) -> None:
    """Create the same id from many threads; exactly one wins."""

    registry = _registry()
    barrier = threading.Barrier(threads)
    winners: List[str] = []
    losers: List[str] = []
    guard = threading.Lock()

    def _claim() -> None:
        barrier.wait()
        who = threading.current_thread().name
        try:
            registry.create(name)
        except InvalidArgumentError:
            with guard:
                losers.append(who)
        else:
            with guard:
                winners.append(who)

    workers = [threading.Thread(target=_claim, name=f"claim-{i}") for i in range(threads)]
    for t in workers:
        t.start()
    for t in workers:
        t.join()

    typer.echo(f"[lapwatch] {len(winners)} of {threads} threads created '{name}'")
    if winners:
        typer.echo(f"  winner: {winners[0]}")


if __name__ == "__main__":
    app()
