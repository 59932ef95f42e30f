"""Configuration loader for the railtrack tracker."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml


@dataclass(frozen=True)
class TrackerConfig:
    """Poll cadence and engine tuning."""

    route_id: str
    poll_interval_seconds: float
    cruise_speed_kmph: float
    animation_duration_ms: float
    state_path: str


@dataclass(frozen=True)
class LiveConfig:
    """Optional live route provider."""

    enabled: bool
    url_template: str
    api_key: str

    @property
    def configured(self) -> bool:
        return self.enabled and bool(self.url_template.strip())


@dataclass(frozen=True)
class DisplayConfig:
    """Status frame output."""

    width: int
    height: int
    frame_path: str
    tick_seconds: float


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    tracker: TrackerConfig
    live: LiveConfig
    display: DisplayConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = _require_key(data, name, name)
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' config must be a mapping")
    return section


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    api_key = os.environ.get("RAIL_API_KEY", "").strip()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    tracker_section = _require_section(data, "tracker")
    display_section = _require_section(data, "display")
    logging_section = _require_section(data, "logging")

    live_section = data.get("live") or {}
    if not isinstance(live_section, dict):
        raise ValueError("'live' config must be a mapping")

    tracker = TrackerConfig(
        route_id=str(_require_key(tracker_section, "route_id", "tracker")),
        poll_interval_seconds=float(_require_key(tracker_section, "poll_interval_seconds", "tracker")),
        cruise_speed_kmph=float(tracker_section.get("cruise_speed_kmph", 70)),
        animation_duration_ms=float(tracker_section.get("animation_duration_ms", 4000)),
        state_path=_require_key(tracker_section, "state_path", "tracker"),
    )
    if tracker.cruise_speed_kmph <= 0:
        raise ValueError("'cruise_speed_kmph' must be positive")

    live = LiveConfig(
        enabled=bool(live_section.get("enabled", False)),
        url_template=str(live_section.get("url_template") or ""),
        api_key=api_key,
    )

    display = DisplayConfig(
        width=_require_key(display_section, "width", "display"),
        height=_require_key(display_section, "height", "display"),
        frame_path=_require_key(display_section, "frame_path", "display"),
        tick_seconds=float(display_section.get("tick_seconds", 0.5)),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=logging_section.get("log_dir") or "",
    )

    return AppConfig(tracker=tracker, live=live, display=display, log=logging)
