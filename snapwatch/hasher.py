from pathlib import Path
import hashlib
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)

DEFAULT_HASH_ALGORITHM = "md5"


def hash_file(path: Union[str, Path], algorithm: str = DEFAULT_HASH_ALGORITHM) -> Optional[str]:
    """
    Fingerprint the full content of a file. Returns hex digest string on
    success, or None when the file can't be read (permission error, file
    removed between listing and reading, etc).
    """
    try:
        hasher = hashlib.new(algorithm)
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                hasher.update(chunk)
        return hasher.hexdigest()
    except OSError as e:
        # Caller skips the file for this pass.
        logger.warning("Failed to hash %s: %s", path, e)
        return None


def is_supported_algorithm(algorithm: str) -> bool:
    try:
        hashlib.new(algorithm).hexdigest()
    except (ValueError, TypeError):
        return False
    return True
