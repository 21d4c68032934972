"""Frame performance logger: writes JSONL for easy pandas analysis.

Usage:
    from lib.perf import perf

    perf.start()
    perf.stage("play")
    with perf.timer("cast_frame", columns=320):
        renderer.render(viewer, surface)

    # On exit:
    perf.finish()
    perf.summary()       # rich table on the shared console
    perf.save()          # writes runs/YYYYMMDD_HHMMSS.jsonl

Load in notebook:
    import pandas as pd
    df = pd.read_json("runs/20261019_143000.jsonl", lines=True)
    df[df.operation == "cast_frame"]["duration_ms"].describe()
"""

import json
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from rich.table import Table

from lib.config import console


@dataclass
class PerfEvent:
    timestamp: float
    elapsed_s: float
    stage: str
    operation: str
    duration_ms: float
    success: bool = True
    error: str | None = None
    meta: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        d = {
            "timestamp": self.timestamp,
            "elapsed_s": round(self.elapsed_s, 3),
            "stage": self.stage,
            "operation": self.operation,
            "duration_ms": round(self.duration_ms, 3),
            "success": self.success,
        }
        if self.error:
            d["error"] = self.error
        d.update(self.meta)
        return d


class PerfLogger:
    def __init__(self):
        self._t0: float = 0.0
        self._events: list[PerfEvent] = []
        self._current_stage: str = ""
        self._stage_starts: dict[str, float] = {}
        self.enabled: bool = True

    def start(self, enabled: bool = True):
        """Reset the clock. With enabled=False nothing is recorded."""
        self._t0 = time.perf_counter()
        self.enabled = enabled

    def _now(self) -> float:
        return time.perf_counter()

    def _close_stage(self, now: float):
        if self._current_stage and self._current_stage in self._stage_starts:
            dur = (now - self._stage_starts[self._current_stage]) * 1000
            self._events.append(PerfEvent(
                timestamp=time.time(),
                elapsed_s=now - self._t0,
                stage=self._current_stage,
                operation="stage_end",
                duration_ms=dur,
            ))

    def stage(self, name: str):
        """Mark entry into a run stage (e.g. "startup", "play")."""
        if not self.enabled:
            return
        now = self._now()
        self._close_stage(now)
        self._current_stage = name
        self._stage_starts[name] = now
        self._events.append(PerfEvent(
            timestamp=time.time(),
            elapsed_s=now - self._t0,
            stage=name,
            operation="stage_start",
            duration_ms=0,
        ))

    def event(self, operation: str, duration_ms: float, success: bool = True,
              error: str | None = None, **meta):
        """Record a single timed event."""
        if not self.enabled:
            return
        now = self._now()
        self._events.append(PerfEvent(
            timestamp=time.time(),
            elapsed_s=now - self._t0,
            stage=self._current_stage,
            operation=operation,
            duration_ms=duration_ms,
            success=success,
            error=error,
            meta=meta,
        ))

    @contextmanager
    def timer(self, operation: str, **meta):
        """Context manager that times a block and records the event."""
        t = self._now()
        err = None
        ok = True
        try:
            yield
        except Exception as e:
            err = f"{type(e).__name__}: {e}"
            ok = False
            raise
        finally:
            dur = (self._now() - t) * 1000
            self.event(operation, dur, success=ok, error=err, **meta)

    def finish(self):
        """Close the final stage."""
        if not self.enabled:
            return
        self._close_stage(self._now())
        self._current_stage = ""

    def summary(self):
        """Print per-stage durations and per-operation latency percentiles."""
        stages: dict[str, float] = {}
        for ev in self._events:
            if ev.operation == "stage_end":
                stages[ev.stage] = ev.duration_ms

        table = Table(title="PERFORMANCE SUMMARY", title_justify="left")
        table.add_column("operation")
        for name in ("count", "min", "median", "p95", "max", "total"):
            table.add_column(name, justify="right")

        ops: dict[str, list[float]] = {}
        for ev in self._events:
            if ev.operation in ("stage_start", "stage_end"):
                continue
            ops.setdefault(ev.operation, []).append(ev.duration_ms)

        for op, durations in sorted(ops.items()):
            durations.sort()
            n = len(durations)
            table.add_row(
                op,
                str(n),
                f"{durations[0]:.2f}",
                f"{durations[n // 2]:.2f}",
                f"{durations[int(n * 0.95)]:.2f}",
                f"{durations[-1]:.2f}",
                f"{sum(durations):.0f}",
            )

        for name, dur in stages.items():
            console.print(f"  {name:<20s} {dur / 1000:>7.2f}s")
        console.print(table)

        frames = ops.get("cast_frame", [])
        play = stages.get("play", 0.0)
        if frames and play > 0:
            console.print(f"  {len(frames)} frames, {len(frames) / (play / 1000):.1f} fps average")

        errors = [ev for ev in self._events if not ev.success]
        if errors:
            console.print(f"  [red]Errors: {len(errors)}[/red]")
            for ev in errors[:5]:
                console.print(f"    [{ev.stage}] {ev.operation}: {ev.error}", markup=False)

    def save(self, directory: str = "runs") -> str:
        """Write all events as JSONL. Returns the file path."""
        Path(directory).mkdir(exist_ok=True)
        ts = time.strftime("%Y%m%d_%H%M%S", time.localtime())
        path = os.path.join(directory, f"{ts}.jsonl")
        with open(path, "w") as f:
            for ev in self._events:
                f.write(json.dumps(ev.to_dict()) + "\n")
        console.print(f"  Perf log saved: {path} ({len(self._events)} events)")
        return path

    def reset(self):
        self.__init__()

    @property
    def events(self) -> list[PerfEvent]:
        return list(self._events)


# Module-level singleton
perf = PerfLogger()
