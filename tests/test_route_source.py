from __future__ import annotations

from unittest.mock import MagicMock, Mock, patch

import pytest

from railtrack.data.fallback import DEFAULT_ROUTE_ID, DEMO_ROUTES, fallback_route, normalize_route_id
from railtrack.data.live_client import EmptyRoute, LiveRouteClient, NetworkFailure, SchemaMismatch
from railtrack.data.models import Route, Waypoint
from railtrack.data.route_source import FALLBACK_NOTICE, RouteSource

LIVE_ROUTE = Route(
    id="INR12951",
    display_name="Rajdhani",
    delay_minutes=0,
    waypoints=(
        Waypoint("MMCT", "Mumbai Central", 18.9696, 72.8194),
        Waypoint("NDLS", "New Delhi", 28.6430, 77.2192),
    ),
)


def test_normalize_route_id() -> None:
    assert normalize_route_id("  inr12627 ") == "INR12627"
    assert normalize_route_id("") == DEFAULT_ROUTE_ID
    assert normalize_route_id(None) == DEFAULT_ROUTE_ID


def test_fallback_unknown_id_uses_default() -> None:
    assert fallback_route("NOPE999") is DEMO_ROUTES[DEFAULT_ROUTE_ID]


@pytest.mark.parametrize("route_id", ["INR12627", "inr12627", "XYZ1", ""])
def test_without_live_provider_returns_fallback(route_id: str) -> None:
    notices = MagicMock()
    source = RouteSource(on_notice=notices)

    first = source.fetch_route(route_id)
    second = source.fetch_route(route_id)

    assert first is second is fallback_route(route_id)
    assert len(first.waypoints) >= 2
    notices.assert_not_called()


def test_live_route_returned_when_available() -> None:
    client = MagicMock()
    client.fetch_route.return_value = LIVE_ROUTE
    source = RouteSource(client=client)

    assert source.fetch_route("inr12951") is LIVE_ROUTE
    client.fetch_route.assert_called_once_with("INR12951")


@pytest.mark.parametrize("error", [NetworkFailure("down"), SchemaMismatch("bad"), EmptyRoute("none")])
def test_live_failure_falls_back_with_notice(error: Exception) -> None:
    client = MagicMock()
    client.fetch_route.side_effect = error
    notices = MagicMock()
    source = RouteSource(client=client, on_notice=notices)

    route = source.fetch_route("INR12627")

    assert route is DEMO_ROUTES["INR12627"]
    notices.assert_called_once_with(FALLBACK_NOTICE)


def test_payload_missing_stations_falls_back() -> None:
    response = Mock()
    response.status_code = 200
    response.json.return_value = {"trainNo": "INR12627", "trainName": "Live"}
    source = RouteSource(client=LiveRouteClient("https://rail.example.com/{route_id}"))

    with patch("requests.get", return_value=response):
        route = source.fetch_route("INR12627")

    assert route is DEMO_ROUTES["INR12627"]


def test_route_requires_two_waypoints() -> None:
    with pytest.raises(ValueError):
        Route(id="X", display_name="X", delay_minutes=0, waypoints=[Waypoint("A", "A", 0.0, 0.0)])


def test_route_stores_waypoints_as_tuple() -> None:
    waypoints = [Waypoint("A", "A", 0.0, 0.0), Waypoint("B", "B", 1.0, 1.0)]
    route = Route(id="X", display_name="X", delay_minutes=0, waypoints=waypoints)

    assert isinstance(route.waypoints, tuple)
    assert route.positions == [(0.0, 0.0), (1.0, 1.0)]


def _live_response(payload: dict) -> Mock:
    response = Mock()
    response.status_code = 200
    response.json.return_value = payload
    return response


def _live_payload(delay=0, first_lat=19.0760, first_lng=72.8777) -> dict:
    return {
        "trainNo": "X1",
        "delayMinutes": delay,
        "stations": [
            {"code": "CSMT", "lat": first_lat, "lng": first_lng},
            {"code": "PUNE", "lat": 18.5204, "lng": 73.8567},
        ],
    }


@pytest.mark.parametrize(
    "payload",
    [
        _live_payload(delay=float("inf")),
        _live_payload(first_lat=float("nan")),
        _live_payload(first_lng=float("inf")),
        _live_payload(first_lat=123.0),
    ],
)
def test_unusable_live_payload_falls_back_with_notice(payload: dict) -> None:
    notices = MagicMock()
    source = RouteSource(client=LiveRouteClient("https://rail.example.com/{route_id}"), on_notice=notices)

    with patch("requests.get", return_value=_live_response(payload)):
        route = source.fetch_route("INR12627")

    assert route is DEMO_ROUTES["INR12627"]
    notices.assert_called_once_with(FALLBACK_NOTICE)


def test_valid_live_payload_is_used() -> None:
    source = RouteSource(client=LiveRouteClient("https://rail.example.com/{route_id}"))

    with patch("requests.get", return_value=_live_response(_live_payload(delay=5))):
        route = source.fetch_route("X1")

    assert route.id == "X1"
    assert route.delay_minutes == 5


def test_failing_notice_handler_still_returns_fallback() -> None:
    client = MagicMock()
    client.fetch_route.side_effect = NetworkFailure("down")
    notices = MagicMock(side_effect=OSError("tty"))
    source = RouteSource(client=client, on_notice=notices)

    route = source.fetch_route("INR12627")

    assert route is DEMO_ROUTES["INR12627"]
    notices.assert_called_once_with(FALLBACK_NOTICE)
