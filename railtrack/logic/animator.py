"""Time-based linear interpolation of the train marker."""

from __future__ import annotations

from dataclasses import dataclass
import threading
import time
from typing import Callable

from railtrack.data.models import LatLng


def now_ms() -> float:
    return time.time() * 1000


@dataclass(frozen=True)
class AnimationFrame:
    """One marker move from ``start`` to ``end``."""

    start: LatLng
    end: LatLng
    started_at_ms: float
    duration_ms: float

    def progress(self, at_ms: float) -> float:
        if self.duration_ms <= 0:
            return 1.0
        return min(max((at_ms - self.started_at_ms) / self.duration_ms, 0.0), 1.0)

    def position(self, at_ms: float) -> LatLng:
        p = self.progress(at_ms)
        if p >= 1.0:
            return self.end
        return (
            self.start[0] + (self.end[0] - self.start[0]) * p,
            self.start[1] + (self.end[1] - self.start[1]) * p,
        )


class PositionAnimator:
    """Holds the frame in flight; a new ``begin`` replaces it outright."""

    def __init__(self, clock: Callable[[], float] = now_ms) -> None:
        self._clock = clock
        self._frame: AnimationFrame | None = None
        self._lock = threading.Lock()

    @property
    def current_frame(self) -> AnimationFrame | None:
        with self._lock:
            return self._frame

    def begin(
        self,
        start: LatLng,
        end: LatLng,
        duration_ms: float,
        started_at_ms: float | None = None,
    ) -> AnimationFrame:
        """Start a new move, discarding any move still in flight."""
        frame = AnimationFrame(
            start=start,
            end=end,
            started_at_ms=self._clock() if started_at_ms is None else started_at_ms,
            duration_ms=duration_ms,
        )
        with self._lock:
            self._frame = frame
        return frame

    def position_at(self, at_ms: float | None = None) -> LatLng | None:
        """Marker position at ``at_ms`` (defaults to now); None before the first move."""
        frame = self.current_frame
        if frame is None:
            return None
        return frame.position(self._clock() if at_ms is None else at_ms)


__all__ = ["AnimationFrame", "PositionAnimator", "now_ms"]
