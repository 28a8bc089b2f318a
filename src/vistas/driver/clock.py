from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from vistas.errors import ConfigurationError


@dataclass(frozen=True)
class FrameTime:
    elapsed: float
    delta: float
    frame: int


class FrameClock:
    """Wall-clock frame timing.

    The first tick starts the clock and reports zero elapsed time. ``elapsed``
    is the running sum of reported deltas, so it never decreases even if the
    time source steps backwards, and it stays consistent with ``max_delta``
    clamping after a long stall.
    """

    def __init__(
        self,
        time_source: Callable[[], float] = time.perf_counter,
        *,
        max_delta: float | None = None,
    ) -> None:
        if max_delta is not None and max_delta <= 0:
            msg = "max_delta must be positive when provided"
            raise ConfigurationError(msg)
        self._time_source = time_source
        self.max_delta = max_delta
        self._previous: float | None = None
        self._elapsed = 0.0
        self._frame = -1

    @property
    def started(self) -> bool:
        return self._previous is not None

    def tick(self) -> FrameTime:
        now = float(self._time_source())
        if self._previous is None:
            delta = 0.0
        else:
            delta = max(0.0, now - self._previous)
        if self.max_delta is not None:
            delta = min(delta, self.max_delta)
        if self._previous is None or now > self._previous:
            self._previous = now
        self._elapsed += delta
        self._frame += 1
        return FrameTime(elapsed=self._elapsed, delta=delta, frame=self._frame)


class FixedStepClock:
    """Deterministic clock advancing ``step`` seconds per tick."""

    def __init__(self, step: float = 1.0 / 60.0, *, start: float = 0.0) -> None:
        if step <= 0:
            msg = "step must be positive"
            raise ConfigurationError(msg)
        if start < 0:
            msg = "start must be non-negative"
            raise ConfigurationError(msg)
        self.step = float(step)
        self.start = float(start)
        self._frame = -1

    def tick(self) -> FrameTime:
        self._frame += 1
        delta = 0.0 if self._frame == 0 else self.step
        return FrameTime(
            elapsed=self.start + (self._frame * self.step),
            delta=delta,
            frame=self._frame,
        )


__all__ = ["FrameTime", "FrameClock", "FixedStepClock"]
