"""Bundled demo routes used when no live provider answers."""

from __future__ import annotations

from railtrack.data.models import Route, Waypoint

DEFAULT_ROUTE_ID = "INR12627"

DEMO_ROUTES: dict[str, Route] = {
    # Mumbai -> Pune -> Hyderabad -> Bengaluru -> Chennai
    "INR12627": Route(
        id="INR12627",
        display_name="BharatCourier Express (Demo)",
        delay_minutes=0,
        waypoints=(
            Waypoint("CSMT", "Mumbai CSMT", 19.0760, 72.8777, "08:00", "08:00"),
            Waypoint("PUNE", "Pune Jn", 18.5204, 73.8567, "12:30", "12:30"),
            Waypoint("HYB", "Hyderabad Deccan", 17.3850, 78.4867, "20:30", "20:35"),
            Waypoint("SBC", "Bengaluru City", 12.9716, 77.5946, "05:30", "05:45"),
            Waypoint("MAS", "Chennai Central", 13.0827, 80.2707, "11:30", "11:35"),
        ),
    ),
}


def normalize_route_id(raw: str | None) -> str:
    """Canonical upper-case identifier; blank input maps to the default route."""
    value = (raw or "").strip().upper()
    return value or DEFAULT_ROUTE_ID


def fallback_route(route_id: str | None) -> Route:
    """Return the demo route for ``route_id``, or the default demo route."""
    return DEMO_ROUTES.get(normalize_route_id(route_id), DEMO_ROUTES[DEFAULT_ROUTE_ID])


__all__ = ["DEFAULT_ROUTE_ID", "DEMO_ROUTES", "normalize_route_id", "fallback_route"]
