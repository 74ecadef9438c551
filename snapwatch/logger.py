from pathlib import Path
from typing import Union

from .events import ChangeEvent


def append_log(path: Union[str, Path], event: ChangeEvent) -> None:
    """
    Append one line for ``event`` to the change log. OSError propagates.

    Paths that aren't valid in the filesystem encoding (undecodable bytes
    surface as lone surrogates) are written as backslash escapes.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("a", encoding="utf-8", errors="backslashreplace") as f:
        f.write(event.to_log_line())
