from argparse import Namespace
from pathlib import Path

import pytest

from snapwatch.config import ConfigError, DEFAULT_CONFIG, load_config
from snapwatch.settings import build_settings


def _args(**kw):
    base = dict(target=None, log=None, interval=None, exclude=None, exclude_mode=None, hash_algorithm=None)
    base.update(kw)
    return Namespace(**base)


def test_defaults_without_config_file(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    s = build_settings(_args(), None)
    assert s.target == tmp_path.resolve()
    assert s.log == (tmp_path / "changes.log").resolve()
    assert s.interval_ms == 5000
    assert s.exclude == (".git", "node_modules", ".DS_Store")
    assert s.exclude_mode == "substring"
    assert s.hash_algorithm == "md5"


def test_load_config_missing_returns_defaults(tmp_path: Path):
    cfg = load_config(tmp_path / "nope.yml")
    assert cfg == DEFAULT_CONFIG
    cfg["exclude"].append("x")
    assert "x" not in DEFAULT_CONFIG["exclude"]


def test_default_config_yml_in_cwd_is_used(tmp_path: Path, monkeypatch):
    (tmp_path / "www").mkdir()
    (tmp_path / "config.yml").write_text(
        "target: www\nlog: watch.log\ninterval_ms: 250\nexclude: ['*.tmp']\nexclude_mode: glob\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    s = build_settings(_args(), None)
    assert s.target == (tmp_path / "www").resolve()
    assert s.log == (tmp_path / "watch.log").resolve()
    assert s.interval_ms == 250
    assert s.exclude == ("*.tmp",)
    assert s.exclude_mode == "glob"


def test_cli_overrides_config(tmp_path: Path, monkeypatch):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    cfg = tmp_path / "custom.yml"
    cfg.write_text("target: a\ninterval_ms: 250\nhash_algorithm: sha1\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    s = build_settings(
        _args(target="b", interval=1000, exclude=[["dist"], ["build", ".cache"]], hash_algorithm="sha256"),
        str(cfg),
    )
    assert s.target == (tmp_path / "b").resolve()
    assert s.interval_ms == 1000
    assert s.exclude == ("dist", "build", ".cache")
    assert s.hash_algorithm == "sha256"


def test_empty_exclude_list_from_cli(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    s = build_settings(_args(exclude=[[]]), None)
    assert s.exclude == ()


def test_empty_config_document_uses_defaults(tmp_path: Path, monkeypatch):
    (tmp_path / "config.yml").write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert build_settings(_args(), None).interval_ms == 5000


@pytest.mark.parametrize(
    "document",
    [
        "interval_ms: 0\n",
        "interval_ms: fast\n",
        "interval_ms: true\n",
        "exclude_mode: regex\n",
        "hash_algorithm: nope\n",
        "target: missing-dir\n",
        "exclude: [1, 2]\n",
        "- just\n- a list\n",
        "target: [unclosed\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, monkeypatch, document):
    (tmp_path / "config.yml").write_text(document, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigError):
        build_settings(_args(), None)


def test_explicit_missing_config_file_raises(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigError):
        build_settings(_args(), str(tmp_path / "absent.yml"))
