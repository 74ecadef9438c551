"""
In-memory snapshot of a watched tree and the scan-to-scan diff.

The snapshot maps every known file path to the fingerprint of its content.
It starts empty, is filled by initialize() and is updated in place by each
diff() pass. Nothing here writes to the console or the change log; callers
get ChangeEvent objects back and decide where they go.

Error policy: files that can't be read are skipped for the pass (hasher logs
a warning), directories that can't be listed contribute no files (scanner
logs a warning). Neither is fatal.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from .comparator import compare_paths
from .events import ChangeEvent, ChangeKind
from .hasher import DEFAULT_HASH_ALGORITHM, hash_file
from .scanner import ExcludeRules, scan_directory

logger = logging.getLogger(__name__)


class SnapshotDiffer:
    def __init__(
        self,
        root: Union[str, Path],
        rules: Optional[ExcludeRules] = None,
        hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> None:
        self.root = os.path.abspath(root)
        self.rules = rules if rules is not None else ExcludeRules(self.root)
        self.hash_algorithm = hash_algorithm
        self.snapshot: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.snapshot)

    def fingerprint(self, path: str) -> Optional[str]:
        return hash_file(path, self.hash_algorithm)

    def should_exclude(self, path: str) -> bool:
        return self.rules.should_exclude(path)

    def scan(self) -> List[str]:
        return scan_directory(self.root, self.rules)

    def initialize(self) -> ChangeEvent:
        """
        Rebuild the snapshot from scratch. Every readable file becomes part of
        the baseline; none of them is reported as added. Returns the
        INITIALIZED marker carrying the number of tracked files.
        """
        self.snapshot.clear()
        for path in self.scan():
            digest = self.fingerprint(path)
            if digest is not None:
                self.snapshot[path] = digest

        logger.debug("Snapshot of %s holds %d files", self.root, len(self.snapshot))
        return ChangeEvent(ChangeKind.INITIALIZED, f"{len(self.snapshot)} files")

    def diff(self) -> List[ChangeEvent]:
        """
        Scan again, update the snapshot and return one event per change:
        added files first, then deleted, then modified, each group in scan
        order. A file that can't be fingerprinted this pass keeps its old
        entry (or stays untracked if new) and produces no event.
        """
        groups = compare_paths(self.snapshot.keys(), self.scan())
        events: List[ChangeEvent] = []

        for path in groups["added"]:
            digest = self.fingerprint(path)
            if digest is None:
                continue
            self.snapshot[path] = digest
            events.append(ChangeEvent(ChangeKind.ADDED, path))

        for path in groups["deleted"]:
            del self.snapshot[path]
            events.append(ChangeEvent(ChangeKind.DELETED, path))

        for path in groups["common"]:
            digest = self.fingerprint(path)
            if digest is None or digest == self.snapshot[path]:
                continue
            self.snapshot[path] = digest
            events.append(ChangeEvent(ChangeKind.MODIFIED, path))

        return events
