"""Client for an optional live train-position provider."""

from __future__ import annotations

import math
from typing import Any
from urllib.parse import quote

import requests

from railtrack.data.models import Route, Waypoint

ROUTE_ID_PLACEHOLDER = "{route_id}"
DEFAULT_TRAIN_NAME = "Live Train"
COORDINATE_LIMITS = {"lat": 90.0, "lng": 180.0}


class LiveRouteError(Exception):
    """Base class for live fetch failures that callers recover from."""


class NetworkFailure(LiveRouteError):
    """Raised when the provider is unreachable or answers with a non-200 response."""


class SchemaMismatch(LiveRouteError):
    """Raised when the provider payload is missing required fields."""


class EmptyRoute(LiveRouteError):
    """Raised when a mapped payload has too few stations to track."""


def _optional_str(station: dict[str, Any], key: str) -> str:
    value = station.get(key)
    return str(value) if value is not None else ""


def _coordinate(station: dict[str, Any], key: str, index: int) -> float:
    value = station.get(key)
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaMismatch(f"Station {index} has no numeric '{key}'")
    try:
        value = float(value)
    except OverflowError as exc:
        raise SchemaMismatch(f"Station {index} has out-of-range '{key}'") from exc
    if not math.isfinite(value) or abs(value) > COORDINATE_LIMITS[key]:
        raise SchemaMismatch(f"Station {index} has out-of-range '{key}': {value!r}")
    return value


def map_payload(payload: Any) -> Route:
    """Map a provider JSON payload into a Route.

    Expected shape::

        {"trainNo": "...", "trainName": "...", "delayMinutes": 0,
         "stations": [{"code", "name", "lat", "lng", "scheduled", "actual"}]}
    """
    if not isinstance(payload, dict):
        raise SchemaMismatch("Payload is not a JSON object")

    train_no = payload.get("trainNo")
    if not isinstance(train_no, str) or not train_no.strip():
        raise SchemaMismatch("Payload has no 'trainNo'")

    stations = payload.get("stations")
    if not isinstance(stations, list):
        raise SchemaMismatch("Payload has no 'stations' list")

    waypoints = []
    for index, station in enumerate(stations):
        if not isinstance(station, dict):
            raise SchemaMismatch(f"Station {index} is not an object")
        waypoints.append(
            Waypoint(
                code=_optional_str(station, "code"),
                name=_optional_str(station, "name"),
                lat=_coordinate(station, "lat", index),
                lng=_coordinate(station, "lng", index),
                scheduled_time=_optional_str(station, "scheduled"),
                actual_time=_optional_str(station, "actual"),
            )
        )

    if len(waypoints) < 2:
        raise EmptyRoute(f"Live route {train_no} has {len(waypoints)} station(s)")

    delay = payload.get("delayMinutes") or 0
    try:
        delay_minutes = int(delay)
    except (TypeError, ValueError, OverflowError) as exc:
        raise SchemaMismatch(f"Invalid 'delayMinutes': {delay!r}") from exc

    return Route(
        id=train_no.strip().upper(),
        display_name=str(payload.get("trainName") or DEFAULT_TRAIN_NAME),
        delay_minutes=delay_minutes,
        waypoints=tuple(waypoints),
    )


class LiveRouteClient:
    """Thin wrapper around a templated live-status endpoint using requests."""

    def __init__(self, url_template: str, api_key: str = "", timeout_seconds: float = 10) -> None:
        self._url_template = url_template
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds

    def build_url(self, route_id: str) -> str:
        return self._url_template.replace(ROUTE_ID_PLACEHOLDER, quote(route_id, safe=""))

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            return {}
        if " " in self._api_key:
            return {"Authorization": self._api_key}
        return {"Authorization": f"Bearer {self._api_key}"}

    def fetch_route(self, route_id: str) -> Route:
        """Fetch and map the live route; raises a LiveRouteError subclass on failure."""
        return map_payload(self._get(self.build_url(route_id)))

    def _get(self, url: str) -> Any:
        try:
            response = requests.get(url, headers=self._headers(), timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise NetworkFailure(f"Live API request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise NetworkFailure(f"Live API request failed: {detail}")

        try:
            return response.json()
        except ValueError as exc:
            raise NetworkFailure("Live API response was not valid JSON") from exc


__all__ = [
    "LiveRouteError",
    "NetworkFailure",
    "SchemaMismatch",
    "EmptyRoute",
    "LiveRouteClient",
    "map_payload",
]
