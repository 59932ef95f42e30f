"""Durable key/value storage for the route cursor."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import threading
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressState:
    """Persisted cursor for one route."""

    waypoint_index: int = 0
    parity_toggle: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"waypoint_index": self.waypoint_index, "parity_toggle": self.parity_toggle}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ProgressState:
        if not isinstance(data, dict):
            return cls()
        try:
            index = int(data.get("waypoint_index", 0))
            parity = int(data.get("parity_toggle", 0)) % 2
        except (TypeError, ValueError):
            return cls()
        return cls(waypoint_index=index, parity_toggle=parity)


class StateStore(Protocol):
    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any]) -> None: ...


class MemoryStateStore:
    """In-process store; state lasts as long as the object."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        value = self._data.get(key)
        return dict(value) if value is not None else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = dict(value)


class JsonFileStateStore:
    """Store every key in one JSON document, rewritten on each ``set``."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._data = self._load()

    def _load(self) -> dict[str, dict[str, Any]]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: top level is not an object", self._path)
            return {}
        return data

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            value = self._data.get(key)
            return dict(value) if isinstance(value, dict) else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        with self._lock:
            self._data[key] = dict(value)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(self._data, handle, indent=2, sort_keys=True)
            tmp_path.replace(self._path)


__all__ = ["ProgressState", "StateStore", "MemoryStateStore", "JsonFileStateStore"]
