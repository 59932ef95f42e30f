"""Data structures for rendering status frames."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from railtrack.data.models import LatLng
from railtrack.engine import RenderEvent
from railtrack.logic.eta import countdown, delay_label
from railtrack.logic.geo import distance_km


@dataclass(frozen=True)
class TimelineRow:
    """Single station entry on the timeline."""

    code: str
    name: str
    scheduled_time: str
    actual_time: str
    active: bool = False
    passed: bool = False

    @property
    def meta(self) -> str:
        text = f"Sch: {self.scheduled_time}"
        if self.actual_time:
            text = f"{text} / Act: {self.actual_time}"
        return text


@dataclass(frozen=True)
class StatusFrame:
    """Everything the composer draws for one tick."""

    title: str
    route_id: str
    delay_text: str
    delayed: bool
    current_station: str
    next_station: str
    distance_text: str
    eta_text: str
    countdown_text: str
    updated_text: str
    arrived: bool
    timeline: list[TimelineRow]
    marker_fraction: float  # 0..1 along the whole route


def _format_eta(eta_ms: float) -> str:
    return datetime.fromtimestamp(eta_ms / 1000).astimezone().strftime("%d %b %H:%M")


def _format_updated(emitted_at_ms: float) -> str:
    return "Upd " + datetime.fromtimestamp(emitted_at_ms / 1000).astimezone().strftime("%H:%M:%S")


def _segment_fraction(event: RenderEvent, marker: LatLng | None) -> float:
    if marker is None:
        return 0.0
    segment_km = distance_km(event.current_waypoint.position, event.next_waypoint.position)
    if segment_km <= 0:
        return 0.0
    return min(distance_km(event.current_waypoint.position, marker) / segment_km, 1.0)


def build_status_frame(event: RenderEvent, now_ms: float, marker: LatLng | None = None) -> StatusFrame:
    """Derive a StatusFrame from the last poll, the clock and the marker position."""
    route = event.route
    current = event.current_waypoint
    upcoming = event.next_waypoint
    remaining = countdown(event.eta.eta_ms, now_ms)

    timeline = [
        TimelineRow(
            code=waypoint.code,
            name=waypoint.name,
            scheduled_time=waypoint.scheduled_time,
            actual_time=waypoint.actual_time,
            active=idx == event.current_index,
            passed=idx < event.current_index,
        )
        for idx, waypoint in enumerate(route.waypoints)
    ]

    segments = len(route.waypoints) - 1
    marker_fraction = (event.current_index + _segment_fraction(event, marker)) / segments

    return StatusFrame(
        title=route.display_name,
        route_id=route.id,
        delay_text=delay_label(route.delay_minutes),
        delayed=route.delay_minutes > 0,
        current_station=f"{current.name} ({current.code})",
        next_station=f"{upcoming.name} ({upcoming.code})",
        distance_text=f"{event.eta.remaining_km:.1f} km",
        eta_text=_format_eta(event.eta.eta_ms),
        countdown_text=remaining.label,
        updated_text=_format_updated(event.emitted_at_ms),
        arrived=remaining.arrived,
        timeline=timeline,
        marker_fraction=marker_fraction,
    )


__all__ = ["TimelineRow", "StatusFrame", "build_status_frame"]
