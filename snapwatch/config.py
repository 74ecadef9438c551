import yaml
from pathlib import Path

DEFAULT_CONFIG = {
    "target": ".",
    "log": "changes.log",
    "interval_ms": 5000,
    "exclude": [".git", "node_modules", ".DS_Store"],
    "exclude_mode": "substring",
    "hash_algorithm": "md5",
}


class ConfigError(ValueError):
    """Configuration file or option that can't be used."""


def default_config() -> dict:
    cfg = DEFAULT_CONFIG.copy()
    cfg["exclude"] = list(DEFAULT_CONFIG["exclude"])
    return cfg


def load_config(path: Path) -> dict:
    # If config file missing → return defaults
    if not path.exists():
        return default_config()

    # Load YAML
    try:
        with path.open("r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e

    if not isinstance(user_config, dict):
        raise ConfigError(f"config file {path} must contain a mapping, got {type(user_config).__name__}")

    # Merge defaults with user config
    final_config = default_config()
    final_config.update(user_config)

    return final_config
