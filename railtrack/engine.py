"""One poll cycle: route -> cursor -> ETA -> animation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from railtrack.config import AppConfig
from railtrack.data.live_client import LiveRouteClient
from railtrack.data.models import Route, Waypoint
from railtrack.data.route_source import RouteSource
from railtrack.data.state_store import JsonFileStateStore
from railtrack.logic.animator import PositionAnimator, now_ms
from railtrack.logic.eta import DEFAULT_CRUISE_SPEED_KMPH, EtaEstimate, compute_eta
from railtrack.logic.progress import ProgressEstimator

DEFAULT_ANIMATION_DURATION_MS = 4000.0


@dataclass(frozen=True)
class RenderEvent:
    """What the presentation layer needs after each poll."""

    route: Route
    current_index: int
    eta: EtaEstimate
    emitted_at_ms: float

    @property
    def current_waypoint(self) -> Waypoint:
        return self.route.waypoints[self.current_index]

    @property
    def next_waypoint(self) -> Waypoint:
        waypoints = self.route.waypoints
        if self.current_index + 1 < len(waypoints):
            return waypoints[self.current_index + 1]
        return waypoints[self.current_index]


@dataclass
class EngineContext:
    """Components shared by every poll cycle."""

    source: RouteSource
    estimator: ProgressEstimator
    animator: PositionAnimator
    cruise_speed_kmph: float = DEFAULT_CRUISE_SPEED_KMPH
    animation_duration_ms: float = DEFAULT_ANIMATION_DURATION_MS
    clock: Callable[[], float] = field(default=now_ms)


def run_cycle(context: EngineContext, route_id: str) -> RenderEvent:
    """Fetch the route, advance the cursor, project ETA and start the marker move."""
    route = context.source.fetch_route(route_id)
    index = context.estimator.advance(route.id, len(route.waypoints))
    now = context.clock()
    eta = compute_eta(route.waypoints, index, now, context.cruise_speed_kmph)

    event = RenderEvent(route=route, current_index=index, eta=eta, emitted_at_ms=now)
    context.animator.begin(
        event.current_waypoint.position,
        event.next_waypoint.position,
        context.animation_duration_ms,
        started_at_ms=now,
    )
    return event


def build_context(config: AppConfig, on_notice: Callable[[str], None] | None = None) -> EngineContext:
    """Wire components from configuration; the live client only when one is configured."""
    client = None
    if config.live.configured:
        client = LiveRouteClient(config.live.url_template, api_key=config.live.api_key)
    return EngineContext(
        source=RouteSource(client=client, on_notice=on_notice),
        estimator=ProgressEstimator(JsonFileStateStore(config.tracker.state_path)),
        animator=PositionAnimator(),
        cruise_speed_kmph=config.tracker.cruise_speed_kmph,
        animation_duration_ms=config.tracker.animation_duration_ms,
    )


__all__ = [
    "DEFAULT_ANIMATION_DURATION_MS",
    "EngineContext",
    "RenderEvent",
    "build_context",
    "run_cycle",
]
