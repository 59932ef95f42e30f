from __future__ import annotations

import pytest

from railtrack.config import AppConfig, DisplayConfig, LiveConfig, LoggingConfig, TrackerConfig
from railtrack.data.fallback import DEMO_ROUTES
from railtrack.data.live_client import LiveRouteClient
from railtrack.data.route_source import RouteSource
from railtrack.data.state_store import MemoryStateStore
from railtrack.engine import EngineContext, build_context, run_cycle
from railtrack.logic.animator import PositionAnimator
from railtrack.logic.progress import ProgressEstimator

NOW_MS = 1_700_000_000_000.0


@pytest.fixture()
def context() -> EngineContext:
    return EngineContext(
        source=RouteSource(),
        estimator=ProgressEstimator(MemoryStateStore()),
        animator=PositionAnimator(),
        clock=lambda: NOW_MS,
    )


def test_first_cycle_starts_at_origin(context: EngineContext) -> None:
    event = run_cycle(context, "inr12627")
    route = DEMO_ROUTES["INR12627"]

    assert event.route is route
    assert event.current_index == 0
    assert event.emitted_at_ms == NOW_MS
    assert event.eta.eta_ms > NOW_MS

    frame = context.animator.current_frame
    assert frame.start == route.waypoints[0].position
    assert frame.end == route.waypoints[1].position
    assert frame.started_at_ms == NOW_MS
    assert frame.duration_ms == 4000


def test_cycle_at_last_segment_animates_to_terminus(context: EngineContext) -> None:
    for _ in range(10):
        event = run_cycle(context, "INR12627")

    route = DEMO_ROUTES["INR12627"]
    assert event.current_index == len(route.waypoints) - 2
    assert event.next_waypoint is route.waypoints[-1]
    assert context.animator.position_at(NOW_MS + 10_000) == route.waypoints[-1].position


def test_remaining_distance_shrinks_as_cursor_moves(context: EngineContext) -> None:
    remaining = [run_cycle(context, "INR12627").eta.remaining_km for _ in range(8)]

    assert remaining == sorted(remaining, reverse=True)
    assert remaining[-1] < remaining[0]


def _config(tmp_path, live: LiveConfig) -> AppConfig:
    return AppConfig(
        tracker=TrackerConfig(
            route_id="INR12627",
            poll_interval_seconds=30,
            cruise_speed_kmph=90,
            animation_duration_ms=2500,
            state_path=str(tmp_path / "progress.json"),
        ),
        live=live,
        display=DisplayConfig(width=256, height=128, frame_path=str(tmp_path / "frame.png"), tick_seconds=0.5),
        log=LoggingConfig(level="INFO", log_dir=""),
    )


def test_build_context_without_live(tmp_path) -> None:
    context = build_context(_config(tmp_path, LiveConfig(enabled=False, url_template="x/{route_id}", api_key="")))

    assert not context.source.live
    assert context.cruise_speed_kmph == 90
    assert context.animation_duration_ms == 2500


def test_build_context_with_live(tmp_path) -> None:
    context = build_context(
        _config(tmp_path, LiveConfig(enabled=True, url_template="https://x/{route_id}", api_key="k"))
    )

    assert context.source.live
    assert isinstance(context.source._client, LiveRouteClient)
