#!/usr/bin/env python3
"""
CLI entrypoint for snapwatch.

Usage examples:
  python -m snapwatch start --config config.yml
  python -m snapwatch check --target ./site --exclude .git node_modules
  python -m snapwatch status
"""

import argparse
import signal
import threading
from typing import Any, Dict, List, Optional

from .config import ConfigError
from .logging_config import configure_logging
from .monitor import Monitor
from .settings import MonitorConfig, build_settings
from .scanner import EXCLUDE_MODES

EXIT_OK = 0
EXIT_USAGE = 2


def install_signal_handlers(shutdown: threading.Event) -> Dict[int, Any]:
    """Route SIGINT/SIGTERM to ``shutdown``. Returns the previous handlers."""

    def _request_shutdown(signum, frame):
        shutdown.set()

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        previous[sig] = signal.signal(sig, _request_shutdown)
    return previous


def restore_signal_handlers(previous: Dict[int, Any]) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler)


def start_command(settings: MonitorConfig, shutdown: Optional[threading.Event] = None) -> int:
    """
    Monitor until SIGINT/SIGTERM, then stop gracefully.
    """
    if shutdown is None:
        shutdown = threading.Event()
    monitor = Monitor(settings)
    print(f"Monitor initialized for: {settings.target}")

    previous = install_signal_handlers(shutdown)
    try:
        monitor.start(settings.interval_ms)
        print(f"Monitoring {len(monitor.differ)} files (checking every {settings.interval_ms}ms, Ctrl+C to stop)")
        while not shutdown.wait(timeout=1.0):
            pass
    finally:
        restore_signal_handlers(previous)

    print("Shutting down monitor...")
    monitor.stop()
    return EXIT_OK


def status_command(settings: MonitorConfig) -> int:
    """
    Print the state of a monitor for the configured root. Performs no scan.
    """
    status = Monitor(settings).status()
    print("Monitor status:")
    print(f"  active:          {status['active']}")
    print(f"  files monitored: {status['files_monitored']}")
    print(f"  watch directory: {status['watch_directory']}")
    print(f"  log file:        {status['log_file']}")
    return EXIT_OK


def check_command(settings: MonitorConfig) -> int:
    """
    One-shot: take a baseline, run a single diff pass and exit.
    """
    monitor = Monitor(settings)
    print(f"Scanning directory: {settings.target}")
    events = monitor.check()
    if not events:
        print("No changes detected.")
    return EXIT_OK


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to YAML config file", default=None)
    parser.add_argument("--target", help="Directory to watch", default=None)
    parser.add_argument("--log", help="Path to the change log file", default=None)
    parser.add_argument("--interval", type=int, help="Check interval in milliseconds", default=None)
    parser.add_argument(
        "--exclude",
        nargs="*",
        action="append",
        help="Exclude patterns (can be passed multiple times)",
        default=None,
    )
    parser.add_argument("--exclude-mode", choices=EXCLUDE_MODES, default=None,
                        help="How exclude patterns match: substring (default) or glob")
    parser.add_argument("--hash-algorithm", default=None, help="hashlib algorithm used to fingerprint files")
    parser.add_argument("--verbose", action="store_true", help="Debug output on stderr")
    parser.add_argument("--debug-log", default=None, help="Also write diagnostics to this rotating log file")


def build_cli() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snapwatch", description="Polling directory change watcher")
    sub = parser.add_subparsers(dest="command", required=True, metavar="{start,status,check}")

    p_start = sub.add_parser("start", help="Watch the directory until interrupted")
    _add_common_args(p_start)

    p_status = sub.add_parser("status", help="Show monitor state without scanning")
    _add_common_args(p_status)

    p_check = sub.add_parser("check", help="Take a baseline and run one diff pass")
    _add_common_args(p_check)

    return parser


COMMANDS = {
    "start": start_command,
    "status": status_command,
    "check": check_command,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_cli()
    # unknown commands print usage and exit 2
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, log_path=args.debug_log)

    try:
        settings = build_settings(args, args.config)
    except ConfigError as e:
        print(f"ERROR: {e}")
        return EXIT_USAGE

    return COMMANDS[args.command](settings)


if __name__ == "__main__":
    raise SystemExit(main())
