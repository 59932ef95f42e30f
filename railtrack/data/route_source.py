"""Route provider with live-then-fallback policy."""

from __future__ import annotations

import logging
from typing import Callable

from railtrack.data.fallback import fallback_route, normalize_route_id
from railtrack.data.live_client import LiveRouteClient, LiveRouteError
from railtrack.data.models import Route

logger = logging.getLogger(__name__)

FALLBACK_NOTICE = "Live API failed, using demo route."


class RouteSource:
    """Yield a Route per poll; never raises to its caller."""

    def __init__(
        self,
        client: LiveRouteClient | None = None,
        on_notice: Callable[[str], None] | None = None,
    ) -> None:
        self._client = client
        self._on_notice = on_notice

    @property
    def live(self) -> bool:
        return self._client is not None

    def fetch_route(self, route_id: str) -> Route:
        """Return the live route when available, otherwise the bundled demo route."""
        route_id = normalize_route_id(route_id)
        if self._client is None:
            return fallback_route(route_id)

        try:
            return self._client.fetch_route(route_id)
        except LiveRouteError as exc:
            logger.warning("Live fetch for %s failed (%s: %s); using demo route", route_id, type(exc).__name__, exc)
            self._notify(FALLBACK_NOTICE)
            return fallback_route(route_id)

    def _notify(self, message: str) -> None:
        if self._on_notice is None:
            return
        try:
            self._on_notice(message)
        except Exception:
            logger.exception("Notice handler failed")


__all__ = ["FALLBACK_NOTICE", "RouteSource"]
