"""Remaining distance, arrival projection and countdown."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from railtrack.data.models import Waypoint
from railtrack.logic.geo import path_distance_km

DEFAULT_CRUISE_SPEED_KMPH = 70.0
MS_PER_HOUR = 3600 * 1000

ARRIVED = "Arrived"


@dataclass(frozen=True)
class EtaEstimate:
    """Distance left from the cursor and projected arrival (epoch ms)."""

    remaining_km: float
    eta_ms: float


@dataclass(frozen=True)
class Countdown:
    """Time-to-arrival view recomputed on every presentation tick."""

    remaining_ms: float
    arrived: bool
    label: str


def compute_eta(
    waypoints: Sequence[Waypoint],
    current_index: int,
    now_ms: float,
    cruise_speed_kmph: float = DEFAULT_CRUISE_SPEED_KMPH,
) -> EtaEstimate:
    """Project arrival assuming constant ``cruise_speed_kmph`` (must be > 0)."""
    remaining_km = path_distance_km(waypoint.position for waypoint in waypoints[current_index:])
    travel_hours = remaining_km / cruise_speed_kmph
    return EtaEstimate(remaining_km=remaining_km, eta_ms=now_ms + travel_hours * MS_PER_HOUR)


def countdown(eta_ms: float, now_ms: float) -> Countdown:
    remaining_ms = eta_ms - now_ms
    if remaining_ms <= 0:
        return Countdown(remaining_ms=remaining_ms, arrived=True, label=ARRIVED)
    total_seconds = int(remaining_ms // 1000)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return Countdown(remaining_ms=remaining_ms, arrived=False, label=f"{hours}h {minutes}m {seconds}s")


def delay_label(delay_minutes: int) -> str:
    return f"Delayed {delay_minutes} min" if delay_minutes > 0 else "On time"


__all__ = [
    "ARRIVED",
    "DEFAULT_CRUISE_SPEED_KMPH",
    "Countdown",
    "EtaEstimate",
    "compute_eta",
    "countdown",
    "delay_label",
]
