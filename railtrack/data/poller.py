"""Threaded poller that runs one engine cycle per interval."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
import time
from typing import Callable

from railtrack.engine import EngineContext, RenderEvent, run_cycle

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 30


@dataclass(frozen=True)
class PollResult:
    """Snapshot of the latest poll attempt."""

    event: RenderEvent | None
    fetched_at: float
    error: str | None


class TrackerPoller:
    """Background poller: polls immediately on start, then every interval.

    Polls run one after another on a single thread, so a slow live fetch
    pushes the next poll back instead of overlapping it.
    """

    def __init__(
        self,
        context: EngineContext,
        route_id: str,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        on_render: Callable[[RenderEvent], None] | None = None,
        on_notice: Callable[[str], None] | None = None,
    ) -> None:
        self._context = context
        self._route_id = route_id
        self._poll_interval_seconds = poll_interval_seconds
        self._on_render = on_render
        self._on_notice = on_notice
        self._latest: PollResult | None = None
        self._latest_event: RenderEvent | None = None
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    def get_latest(self) -> PollResult | None:
        """Return the most recent poll result, if any."""
        with self._lock:
            return self._latest

    def get_latest_event(self) -> RenderEvent | None:
        """Return the event from the most recent completed engine cycle, if any."""
        with self._lock:
            return self._latest_event

    def start(self) -> None:
        """Start the background polling thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="railtrack-poller", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Signal the polling thread to stop."""
        self._stop_event.set()

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            self.poll_once()
            self._stop_event.wait(timeout=self._poll_interval_seconds)

    def poll_once(self) -> PollResult:
        """Run one cycle; failures become a notice and never escape."""
        try:
            event = run_cycle(self._context, self._route_id)
            # the cursor and animator already moved; publish before the listener runs
            with self._lock:
                self._latest_event = event
            if self._on_render is not None:
                self._on_render(event)
            result = PollResult(event=event, fetched_at=time.time(), error=None)
            logger.info(
                "Poll %s: at %s (%d/%d), %.1f km left",
                event.route.id,
                event.current_waypoint.code,
                event.current_index,
                len(event.route.waypoints) - 1,
                event.eta.remaining_km,
            )
        except Exception as exc:
            logger.exception("Poll for %s failed", self._route_id)
            self._notify(f"Update failed: {exc}")
            result = PollResult(event=None, fetched_at=time.time(), error=str(exc))

        with self._lock:
            self._latest = result
        return result

    def _notify(self, message: str) -> None:
        if self._on_notice is None:
            return
        try:
            self._on_notice(message)
        except Exception:
            logger.exception("Notice handler failed")


__all__ = ["DEFAULT_POLL_INTERVAL_SECONDS", "PollResult", "TrackerPoller"]
