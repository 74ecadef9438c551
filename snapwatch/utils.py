import os
from pathlib import Path
from typing import Union


def resolve_path(path_str: Union[str, Path]) -> Path:
    return Path(path_str).expanduser().resolve()


def normalize_rel_path(path: Union[str, Path]) -> str:
    """Relative path with forward slashes, so patterns behave the same on every OS."""
    return str(path).replace(os.sep, "/").replace("\\", "/")
