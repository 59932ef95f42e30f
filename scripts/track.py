"""Run the tracker: poll the route, redraw the status frame, serve a preview."""

from __future__ import annotations

import argparse
from http.server import BaseHTTPRequestHandler, HTTPServer
import logging
from pathlib import Path
import threading
import time
from typing import Any

from railtrack.config import load_config
from railtrack.data.fallback import normalize_route_id
from railtrack.data.poller import TrackerPoller
from railtrack.engine import build_context, run_cycle
from railtrack.log import configure_logging
from railtrack.logic.animator import now_ms
from railtrack.rendering import build_status_frame, compose_frame, save_frame

logger = logging.getLogger("railtrack.track")

FRAME_PATH = Path("emulator_output/frame.png")
PREVIEW_PORT = 8080


class PreviewHandler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:  # noqa: N802
        if self.path == "/healthz":
            self.send_response(200)
            self.send_header("Content-Type", "text/plain; charset=utf-8")
            self.end_headers()
            self.wfile.write(b"ok")
            return

        if self.path == "/frame.png":
            if not FRAME_PATH.exists():
                self.send_response(404)
                self.end_headers()
                return
            self.send_response(200)
            self.send_header("Content-Type", "image/png")
            self.end_headers()
            self.wfile.write(FRAME_PATH.read_bytes())
            return

        if self.path == "/":
            html = """<!doctype html>
<html>
  <head>
    <meta http-equiv="refresh" content="2">
    <style>
      body { background: #111; color: #fff; font-family: sans-serif; }
      img { width: 768px; image-rendering: pixelated; }
    </style>
    <title>Train Live Status</title>
  </head>
  <body>
    <h1>Train Live Status</h1>
    <img src="/frame.png" alt="Frame">
  </body>
</html>"""
            self.send_response(200)
            self.send_header("Content-Type", "text/html; charset=utf-8")
            self.end_headers()
            self.wfile.write(html.encode("utf-8"))
            return

        self.send_response(404)
        self.end_headers()

    def log_message(self, format: str, *args: Any) -> None:
        return


def _run_server() -> None:
    server = HTTPServer(("0.0.0.0", PREVIEW_PORT), PreviewHandler)
    server.serve_forever()


def _show_notice(message: str) -> None:
    logger.warning("notice: %s", message)


def main() -> int:
    global FRAME_PATH

    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml", help="Path to config YAML")
    parser.add_argument("--route", help="Route identifier, e.g. INR12627")
    parser.add_argument("--once", action="store_true", help="Run one poll, write one frame and exit")
    parser.add_argument("--no-server", action="store_true", help="Disable preview web server")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)
    FRAME_PATH = Path(config.display.frame_path)

    route_id = normalize_route_id(args.route or config.tracker.route_id)
    context = build_context(config, on_notice=_show_notice)
    width, height = config.display.width, config.display.height

    if args.once:
        event = run_cycle(context, route_id)
        frame = build_status_frame(event, now_ms(), context.animator.position_at())
        save_frame(compose_frame(frame, width, height), str(FRAME_PATH))
        logger.info("Wrote %s (%s, %s)", FRAME_PATH, frame.current_station, frame.countdown_text)
        return 0

    if not args.no_server:
        server_thread = threading.Thread(target=_run_server, daemon=True)
        server_thread.start()
        logger.info("Preview server on port %d", PREVIEW_PORT)

    poller = TrackerPoller(
        context,
        route_id,
        poll_interval_seconds=config.tracker.poll_interval_seconds,
        on_notice=_show_notice,
    )
    poller.start()

    try:
        while True:
            event = poller.get_latest_event()
            if event is not None:
                try:
                    frame = build_status_frame(event, now_ms(), context.animator.position_at())
                    save_frame(compose_frame(frame, width, height), str(FRAME_PATH))
                except Exception:
                    logger.exception("Frame render failed")
            time.sleep(config.display.tick_seconds)
    except KeyboardInterrupt:
        poller.stop()
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
