"""Directory emptiness check."""

import os
from pathlib import Path


def is_dir_empty(path: Path | str) -> bool:
    """Check whether a directory has no entries.

    Only a single entry is read, so the check is cheap even for large
    directories.

    Args:
        path: Directory to inspect.

    Returns:
        True if the directory contains no entries of any type.

    Raises:
        OSError: If the directory cannot be opened or read.
    """
    with os.scandir(path) as entries:
        return next(entries, None) is None
