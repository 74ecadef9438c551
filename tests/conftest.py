from pathlib import Path

import pytest

from snapwatch.settings import MonitorConfig


@pytest.fixture
def watch_root(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def make_config(tmp_path: Path, watch_root: Path):
    def _make(**overrides) -> MonitorConfig:
        values = {
            "target": watch_root,
            "log": tmp_path / "changes.log",
            "interval_ms": 50,
            "exclude": (".git", "node_modules", ".DS_Store"),
        }
        values.update(overrides)
        return MonitorConfig(**values)

    return _make
