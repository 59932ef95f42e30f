"""Frame composer for the tracker status panel."""

from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from railtrack.rendering.frame_data import StatusFrame

MIN_WIDTH = 192
MIN_HEIGHT = 96

TEXT_LEFT_X = 4
LINE_HEIGHT = 12

STRIP_MARGIN_X = 8
STRIP_BOTTOM_OFFSET = 12
STATION_DOT_RADIUS = 2
MARKER_RADIUS = 3

COLOR_BACKGROUND = (0, 0, 0)
COLOR_TEXT = (255, 255, 255)
COLOR_DIM_TEXT = (136, 136, 136)
COLOR_ON_TIME = (0, 200, 0)
COLOR_DELAYED = (200, 0, 0)
COLOR_COUNTDOWN = (220, 180, 0)
COLOR_ARRIVED = (0, 200, 0)
COLOR_TRACK = (72, 72, 72)
COLOR_STATION = (136, 136, 136)
COLOR_STATION_PASSED = (0, 132, 61)
COLOR_STATION_ACTIVE = (232, 119, 34)
COLOR_MARKER = (218, 41, 28)

FONT = ImageFont.load_default()


def _station_x(index: int, count: int, width: int) -> int:
    span = width - 2 * STRIP_MARGIN_X
    return STRIP_MARGIN_X + round(span * index / (count - 1))


def _draw_timeline(draw: ImageDraw.ImageDraw, frame: StatusFrame, width: int, height: int) -> None:
    strip_y = height - STRIP_BOTTOM_OFFSET
    count = len(frame.timeline)
    draw.line((STRIP_MARGIN_X, strip_y, width - STRIP_MARGIN_X, strip_y), fill=COLOR_TRACK)

    for idx, row in enumerate(frame.timeline):
        x = _station_x(idx, count, width)
        if row.active:
            color = COLOR_STATION_ACTIVE
        elif row.passed:
            color = COLOR_STATION_PASSED
        else:
            color = COLOR_STATION
        r = STATION_DOT_RADIUS
        draw.ellipse((x - r, strip_y - r, x + r, strip_y + r), fill=color)

    # Only the endpoints get labels; interior codes overlap on narrow panels.
    first, last = frame.timeline[0], frame.timeline[-1]
    draw.text((STRIP_MARGIN_X - 4, strip_y + 2), first.code, font=FONT, fill=COLOR_DIM_TEXT)
    last_bbox = draw.textbbox((0, 0), last.code, font=FONT)
    last_width = last_bbox[2] - last_bbox[0]
    draw.text((width - STRIP_MARGIN_X - last_width + 4, strip_y + 2), last.code, font=FONT, fill=COLOR_DIM_TEXT)

    span = width - 2 * STRIP_MARGIN_X
    marker_x = STRIP_MARGIN_X + round(span * min(max(frame.marker_fraction, 0.0), 1.0))
    r = MARKER_RADIUS
    draw.ellipse((marker_x - r, strip_y - r, marker_x + r, strip_y + r), fill=COLOR_MARKER)


def compose_frame(frame: StatusFrame, width: int = MIN_WIDTH, height: int = MIN_HEIGHT) -> Image.Image:
    """Compose an RGB status image: header, stations, ETA and a route strip."""
    if width < MIN_WIDTH:
        raise ValueError(f"Width must be at least {MIN_WIDTH}, got {width}.")
    if height < MIN_HEIGHT:
        raise ValueError(f"Height must be at least {MIN_HEIGHT}, got {height}.")
    if len(frame.timeline) < 2:
        raise ValueError("Status frame needs at least 2 timeline rows.")

    image = Image.new("RGB", (width, height), COLOR_BACKGROUND)
    draw = ImageDraw.Draw(image)

    lines = [
        (f"{frame.route_id} {frame.title}", COLOR_TEXT),
        (frame.delay_text, COLOR_DELAYED if frame.delayed else COLOR_ON_TIME),
        (f"Now: {frame.current_station}", COLOR_TEXT),
        (f"Next: {frame.next_station}", COLOR_DIM_TEXT),
        (f"{frame.distance_text}  ETA {frame.eta_text}", COLOR_DIM_TEXT),
        (frame.countdown_text, COLOR_ARRIVED if frame.arrived else COLOR_COUNTDOWN),
    ]
    text_bottom = height - STRIP_BOTTOM_OFFSET - MARKER_RADIUS - 2
    for idx, (text, color) in enumerate(lines):
        y = 2 + idx * LINE_HEIGHT
        if y + LINE_HEIGHT > text_bottom:
            break
        draw.text((TEXT_LEFT_X, y), text, font=FONT, fill=color)

    # last update sits right-aligned on the delay line
    updated_bbox = draw.textbbox((0, 0), frame.updated_text, font=FONT)
    updated_width = updated_bbox[2] - updated_bbox[0]
    draw.text((width - TEXT_LEFT_X - updated_width, 2 + LINE_HEIGHT), frame.updated_text, font=FONT, fill=COLOR_DIM_TEXT)

    _draw_timeline(draw, frame, width, height)
    return image


def save_frame(image: Image.Image, path: str = "emulator_output/frame.png") -> None:
    """Save a frame to disk as a PNG image."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format="PNG")


__all__ = ["compose_frame", "save_frame"]
