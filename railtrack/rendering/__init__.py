"""Rendering utilities for the tracker status panel."""

from railtrack.rendering.composer import compose_frame, save_frame
from railtrack.rendering.frame_data import StatusFrame, TimelineRow, build_status_frame

__all__ = ["StatusFrame", "TimelineRow", "build_status_frame", "compose_frame", "save_frame"]
