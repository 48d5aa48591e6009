"""Command line entry point: monitor the configured sites and serve their status."""

from __future__ import annotations

import argparse
import logging
import sys
import threading

from .config import CONFIG_FILE
from .monitor import CHECK_INTERVAL_SECONDS, run_monitor_loop
from .storage import DEFAULT_DB_PATH, StatusStore, StorageError
from .webui import DEFAULT_PORT, start_web_server


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="uptimewatch",
        description="Check websites periodically and show their status on a web page.",
    )
    parser.add_argument("--config", default=CONFIG_FILE, help="file listing the sites to check")
    parser.add_argument("--db", default=DEFAULT_DB_PATH, help="SQLite database of check results")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port of the web page")
    parser.add_argument(
        "--interval",
        type=float,
        default=CHECK_INTERVAL_SECONDS,
        help="seconds between rounds of checks",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the monitor in the background and the web page until Enter is pressed."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        store = StatusStore(args.db)
    except StorageError as exc:
        print(exc, file=sys.stderr)
        return 1

    stop_event = threading.Event()
    with store:
        monitor = threading.Thread(
            target=run_monitor_loop,
            args=(store, args.config, args.interval, stop_event),
            name="monitor",
            daemon=True,
        )
        monitor.start()
        try:
            start_web_server(store, args.config, args.port)
        finally:
            stop_event.set()
            monitor.join()
    return 0


if __name__ == "__main__":
    sys.exit(main())