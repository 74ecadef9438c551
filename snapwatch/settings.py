from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import ConfigError, default_config, load_config
from .hasher import is_supported_algorithm
from .scanner import EXCLUDE_MODES
from .utils import resolve_path

DEFAULT_CONFIG_PATH = "config.yml"


@dataclass(frozen=True)
class MonitorConfig:
    """Everything a Monitor needs; built once at startup and never changed."""

    target: Path
    log: Path
    interval_ms: int = 5000
    exclude: Tuple[str, ...] = field(default_factory=tuple)
    exclude_mode: str = "substring"
    hash_algorithm: str = "md5"


def _flatten_excludes(groups: Optional[List[Any]]) -> Optional[List[str]]:
    """
    ``--exclude a b --exclude c`` arrives as [["a", "b"], ["c"]].
    None means the option was not given; a bare ``--exclude`` clears the list.
    """
    if groups is None:
        return None
    return [pattern for group in groups for pattern in (group if isinstance(group, list) else [group])]


def _validate(final: Dict[str, Any]) -> MonitorConfig:
    interval = final.get("interval_ms")
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise ConfigError(f"interval_ms must be a positive integer, got {interval!r}")

    exclude = final.get("exclude") or []
    if isinstance(exclude, str):
        exclude = [exclude]
    if not isinstance(exclude, list) or not all(isinstance(p, str) for p in exclude):
        raise ConfigError(f"exclude must be a list of strings, got {exclude!r}")

    mode = final.get("exclude_mode")
    if mode not in EXCLUDE_MODES:
        raise ConfigError(f"exclude_mode must be one of {', '.join(EXCLUDE_MODES)}, got {mode!r}")

    algo = final.get("hash_algorithm")
    if not isinstance(algo, str) or not is_supported_algorithm(algo):
        raise ConfigError(f"unsupported hash_algorithm: {algo!r}")

    target = resolve_path(str(final.get("target") or "."))
    if not target.is_dir():
        raise ConfigError(f"watch directory does not exist: {target}")

    log = final.get("log")
    if not log:
        raise ConfigError("log file path must not be empty")

    return MonitorConfig(
        target=target,
        log=resolve_path(str(log)),
        interval_ms=interval,
        exclude=tuple(exclude),
        exclude_mode=mode,
        hash_algorithm=algo,
    )


def build_settings(args: Any, config_path: Optional[str]) -> MonitorConfig:
    """
    Build final settings using priority:
      DEFAULTS <- config file <- CLI args (non-None)
    Args:
      args: argparse.Namespace (CLI arguments)
      config_path: explicit config file path (string) or None
    Returns:
      validated MonitorConfig
    Raises:
      ConfigError when the merged settings are unusable
    """
    # 1) Load defaults and config file
    if config_path:
        cfg_path = Path(config_path)
        if not cfg_path.exists():
            raise ConfigError(f"config file not found: {cfg_path}")
    else:
        cfg_path = Path(DEFAULT_CONFIG_PATH)
    user_cfg = load_config(cfg_path) if cfg_path.exists() else default_config()

    final = default_config()
    final.update(user_cfg)  # config overrides defaults

    # 2) CLI overrides (only if provided / not None)
    for key in ("target", "log", "exclude_mode", "hash_algorithm"):
        value = getattr(args, key, None)
        if value:
            final[key] = value

    interval = getattr(args, "interval", None)
    if interval is not None:
        final["interval_ms"] = interval

    # normalize exclude
    cli_excludes = _flatten_excludes(getattr(args, "exclude", None))
    if cli_excludes is not None:
        final["exclude"] = cli_excludes

    return _validate(final)
