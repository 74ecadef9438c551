import logging
import os
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

from .utils import normalize_rel_path

logger = logging.getLogger(__name__)

EXCLUDE_MODES = ("substring", "glob")


def _matches_substring(rel_path: str, patterns: List[str]) -> bool:
    """
    Plain containment test: '*.log' only matches paths that literally contain
    the characters '*.log'. This is the historical behaviour and the default.
    """
    return any(pat and pat in rel_path for pat in patterns)


def _glob_hit(rel_path: str, pattern: str) -> bool:
    if fnmatch(rel_path, pattern):
        return True
    # '.git' should prune 'sub/.git' as well as '.git'
    return any(fnmatch(part, pattern) for part in rel_path.split("/"))


def _matches_exclude_patterns(rel_path: str, patterns: List[str]) -> bool:
    """
    Glob-mode exclusion. A pattern hits when it matches the whole relative
    path or any single component of it, so '.git' also catches 'sub/.git/HEAD'.
    Patterns apply in order; the last one that hits decides, and a leading
    '!' turns a hit into a re-inclusion.
    """
    if not patterns:
        return False

    excluded = False
    for pat in patterns:
        if pat == "":
            continue
        if pat.startswith("!"):
            if _glob_hit(rel_path, pat[1:]):
                excluded = False
        elif _glob_hit(rel_path, pat):
            excluded = True
    return excluded


class ExcludeRules:
    """
    Decides whether a path under ``root`` is left out of the scan.

    Patterns are matched against the path relative to the root, so the
    location of the watched directory itself never causes a match.
    ``always_ignore`` holds absolute paths that are skipped regardless of
    the patterns (the monitor's own change log).
    """

    def __init__(
        self,
        root: Union[str, Path],
        patterns: Optional[List[str]] = None,
        mode: str = "substring",
        always_ignore: Iterable[Union[str, Path]] = (),
    ) -> None:
        if mode not in EXCLUDE_MODES:
            raise ValueError(f"unknown exclude mode: {mode!r}")
        self.root = os.path.abspath(root)
        self.patterns = list(patterns or [])
        self.mode = mode
        self._always_ignore = {os.path.normcase(os.path.abspath(p)) for p in always_ignore}

    def relative(self, path: Union[str, Path]) -> str:
        return normalize_rel_path(os.path.relpath(os.path.abspath(path), self.root))

    def should_exclude(self, path: Union[str, Path]) -> bool:
        if os.path.normcase(os.path.abspath(path)) in self._always_ignore:
            return True
        rel_path = self.relative(path)
        if self.mode == "glob":
            return _matches_exclude_patterns(rel_path, self.patterns)
        return _matches_substring(rel_path, self.patterns)


def _dir_key(path: str) -> Optional[Tuple[int, int]]:
    try:
        st = os.stat(path)
    except OSError:
        return None
    return st.st_dev, st.st_ino


def scan_directory(target: Union[str, Path], rules: Optional[ExcludeRules] = None, follow_symlinks: bool = True) -> List[str]:
    """
    Walk ``target`` depth-first and return the path of every regular file
    found, in directory-listing order (no sorting).

    Excluded directories are pruned, never descended into. Directories that
    can't be listed are skipped with a warning; the rest of the tree is
    still scanned.

    Symlinked directories are followed by default. Each physical directory
    is entered once per scan: a link back to an ancestor, or a second link
    to a directory already walked, is not descended into.
    """
    root = os.path.abspath(target)
    if rules is None:
        rules = ExcludeRules(root)

    def _on_error(err: OSError) -> None:
        logger.warning("Cannot list directory %s: %s", err.filename, err.strerror or err)

    visited: Set[Tuple[int, int]] = set()
    root_key = _dir_key(root)
    if root_key is not None:
        visited.add(root_key)

    def _enter(dirpath: str, name: str) -> bool:
        path = os.path.join(dirpath, name)
        if rules.should_exclude(path):
            return False
        if not follow_symlinks:
            return True
        key = _dir_key(path)
        if key is None:
            # let os.walk report it through _on_error
            return True
        if key in visited:
            logger.debug("Not descending into %s again (symlink loop or duplicate)", path)
            return False
        visited.add(key)
        return True

    results: List[str] = []
    for dirpath, dirs, files in os.walk(root, onerror=_on_error, followlinks=follow_symlinks):
        dirs[:] = [d for d in dirs if _enter(dirpath, d)]

        for filename in files:
            file_path = os.path.join(dirpath, filename)
            if rules.should_exclude(file_path):
                continue
            # follows symlinks; drops sockets, fifos and dangling links
            if not os.path.isfile(file_path):
                continue
            results.append(file_path)

    return results
