from pathlib import Path

from snapwatch.utils import normalize_rel_path, resolve_path


def test_normalize_rel_path_separators():
    assert normalize_rel_path(r"docs\img\logo.png") == "docs/img/logo.png"
    assert normalize_rel_path(Path("a") / "b") == "a/b"


def test_resolve_path_is_absolute(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert resolve_path("sub/..") == tmp_path.resolve()
