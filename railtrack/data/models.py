"""Route and waypoint value types."""

from __future__ import annotations

from dataclasses import dataclass

LatLng = tuple[float, float]


@dataclass(frozen=True)
class Waypoint:
    """A named station with coordinates and schedule strings."""

    code: str
    name: str
    lat: float
    lng: float
    scheduled_time: str = ""
    actual_time: str = ""

    @property
    def position(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class Route:
    """An ordered station sequence; order is travel order."""

    id: str
    display_name: str
    delay_minutes: int
    waypoints: tuple[Waypoint, ...]

    def __post_init__(self) -> None:
        # Accept lists from callers but store an immutable tuple.
        object.__setattr__(self, "waypoints", tuple(self.waypoints))
        if len(self.waypoints) < 2:
            raise ValueError(
                f"Route {self.id!r} needs at least 2 waypoints, got {len(self.waypoints)}"
            )

    @property
    def positions(self) -> list[LatLng]:
        return [waypoint.position for waypoint in self.waypoints]


__all__ = ["LatLng", "Waypoint", "Route"]
