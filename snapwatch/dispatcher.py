from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from .events import ChangeEvent
from .logger import append_log


def dispatch_event(event: ChangeEvent, log_path: Optional[Path]) -> bool:
    """
    Write ``event`` to the console and append it to the change log.

    A failing log write is reported on stderr and never interrupts monitoring.
    Returns False when the log line could not be written.
    """
    _print_to_console(event)
    if log_path is None:
        return True
    try:
        append_log(log_path, event)
    except (OSError, ValueError) as e:
        # ValueError covers encoding errors
        print(_console_safe(f"ERROR: Failed to write to log file {log_path}: {e}", sys.stderr), file=sys.stderr)
        return False
    return True


def _console_safe(text: str, stream) -> str:
    encoding = getattr(stream, "encoding", None) or "utf-8"
    return text.encode(encoding, "backslashreplace").decode(encoding, "replace")


def _print_to_console(event: ChangeEvent) -> None:
    print(_console_safe(f"[{event.kind.value}] {event.path}", sys.stdout), flush=True)
