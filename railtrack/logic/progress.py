"""Persistent route cursor advanced once per poll."""

from __future__ import annotations

import logging

from railtrack.data.fallback import normalize_route_id
from railtrack.data.state_store import ProgressState, StateStore

logger = logging.getLogger(__name__)

STATE_KEY_PREFIX = "rail_idx:"


def state_key(route_id: str) -> str:
    return STATE_KEY_PREFIX + normalize_route_id(route_id)


class ProgressEstimator:
    """Deterministic stand-in for telemetry: one station every two polls.

    The cursor is the index of the station the train last departed from. It
    stays within ``[0, waypoint_count - 2]`` so there is always a next station
    to animate toward, and holds on the final segment once it gets there.
    """

    def __init__(self, store: StateStore) -> None:
        self._store = store

    def load(self, route_id: str) -> ProgressState:
        return ProgressState.from_dict(self._store.get(state_key(route_id)))

    def advance(self, route_id: str, waypoint_count: int) -> int:
        """Step the cursor for ``route_id`` and return the current index."""
        last_index = max(waypoint_count - 2, 0)
        state = self.load(route_id)

        index = min(max(state.waypoint_index, 0), last_index)
        parity = 1 - state.parity_toggle
        if parity == 0 and index < last_index:
            index += 1

        self._store.set(state_key(route_id), ProgressState(index, parity).to_dict())
        logger.debug("Cursor for %s at %d (parity %d)", route_id, index, parity)
        return index


__all__ = ["STATE_KEY_PREFIX", "state_key", "ProgressEstimator"]
