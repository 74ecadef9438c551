from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .dispatcher import dispatch_event
from .events import ChangeEvent, ChangeKind
from .scanner import ExcludeRules
from .settings import MonitorConfig
from .snapshot import SnapshotDiffer

logger = logging.getLogger(__name__)

Dispatch = Callable[[ChangeEvent, Optional[Path]], object]


class Monitor:
    """
    Polls one directory tree and reports changes.

    Periodic passes run on a single worker thread with a fixed delay: the
    next wait starts only once the previous pass has returned, so two passes
    never overlap and the snapshot is only touched by one thread at a time.
    """

    def __init__(self, config: MonitorConfig, dispatch: Dispatch = dispatch_event) -> None:
        self.config = config
        self._dispatch = dispatch
        rules = ExcludeRules(
            config.target,
            list(config.exclude),
            mode=config.exclude_mode,
            always_ignore=[config.log],
        )
        self.differ = SnapshotDiffer(config.target, rules, config.hash_algorithm)

        self._active = False
        self._stop_event = threading.Event()
        self._worker: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return self._active

    def _emit(self, event: ChangeEvent) -> None:
        self._dispatch(event, self.config.log)

    # ---- single passes ---------------------------------------------------
    def initialize(self) -> int:
        marker = self.differ.initialize()
        self._emit(marker)
        return len(self.differ)

    def check_for_changes(self) -> List[ChangeEvent]:
        events = self.differ.diff()
        for event in events:
            self._emit(event)
        return events

    def check(self) -> List[ChangeEvent]:
        """One-shot: fresh baseline followed by a single diff pass."""
        self.initialize()
        return self.check_for_changes()

    # ---- scheduling ------------------------------------------------------
    def start(self, interval_ms: Optional[int] = None) -> bool:
        if self._active:
            logger.warning("Monitor is already running")
            return False

        interval_ms = interval_ms or self.config.interval_ms
        self.initialize()
        self._active = True
        self._stop_event.clear()

        logger.info("Checking %s every %dms", self.config.target, interval_ms)
        self._worker = threading.Thread(
            target=self._run,
            args=(interval_ms / 1000.0,),
            name="snapwatch-poller",
            daemon=True,
        )
        self._worker.start()
        return True

    def _run(self, interval_seconds: float) -> None:
        while not self._stop_event.wait(interval_seconds):
            try:
                self.check_for_changes()
            except Exception:
                # keep polling; the next pass starts from the same snapshot
                logger.exception("Diff pass over %s failed", self.config.target)

    def stop(self) -> bool:
        """
        Prevent further passes, wait for a running one to finish, then write
        the STOPPED marker.
        """
        if not self._active:
            logger.warning("Monitor is not running")
            return False

        self._stop_event.set()
        worker = self._worker
        if worker is not None and worker is not threading.current_thread():
            worker.join()
        self._worker = None
        self._active = False
        self._emit(ChangeEvent(ChangeKind.STOPPED, "monitoring"))
        return True

    def status(self) -> Dict[str, Union[bool, int, str]]:
        return {
            "active": self._active,
            "files_monitored": len(self.differ),
            "watch_directory": str(self.config.target),
            "log_file": str(self.config.log),
        }
