"""
Stage timing for pipeline logs.

Example:
    with timeit("tts_call") as t:
        response = await synthesizer.synthesize(text, voice)
    verbose(_LOG, "tts_done", seconds=t.seconds)
"""
from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, Optional


@dataclass
class Timing:
    """Result of one timed block."""
    name: str
    seconds: float
    meta: Optional[Dict[str, Any]] = None


class timeit:
    """
    Context manager measuring wall-clock time with perf_counter().

    Works across ``await`` points; the measured time includes time spent
    suspended, which is what a caller waiting on the upstream API sees.
    """

    def __init__(self, name: str, meta: Optional[Dict[str, Any]] = None):
        self.name = name
        self.meta = meta
        self._t0: float | None = None
        self.timing: Timing | None = None

    def __enter__(self) -> "timeit":
        self._t0 = perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        t1 = perf_counter()
        assert self._t0 is not None
        self.timing = Timing(name=self.name, seconds=(t1 - self._t0), meta=self.meta)

    @property
    def seconds(self) -> float:
        """Rounded duration, -1.0 while the block is still running."""
        if self.timing is None:
            return -1.0
        return round(self.timing.seconds, 3)


class StageTimer:
    """Collects named stage durations for one request."""

    def __init__(self) -> None:
        self.timings: Dict[str, float] = {}

    def stage(self, name: str) -> "_Stage":
        return _Stage(self, name)

    @property
    def total(self) -> float:
        return round(sum(self.timings.values()), 3)


class _Stage(timeit):
    def __init__(self, owner: StageTimer, name: str):
        super().__init__(name)
        self._owner = owner

    def __exit__(self, exc_type, exc, tb) -> None:
        super().__exit__(exc_type, exc, tb)
        assert self.timing is not None
        self._owner.timings[self.name] = round(self.timing.seconds, 3)
