"""Rename entries to random names before deletion.

Renaming right before removal keeps the original name out of any
directory-entry metadata left behind on disk.
"""

import logging
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


def _random_name() -> str:
    return uuid.uuid4().hex


def obfuscate_file(path: Path | str) -> Path:
    """Rename a file to a random name, keeping its extension.

    Args:
        path: File to rename.

    Returns:
        The new path, in the same parent directory.

    Raises:
        OSError: If the rename fails (e.g. the source does not exist).
    """
    source = Path(path)
    target = source.with_name(_random_name() + source.suffix)
    source.rename(target)
    logger.debug("Obfuscated file %s -> %s", source, target.name)
    return target


def obfuscate_directory(path: Path | str) -> Path:
    """Rename a directory to a random name.

    Args:
        path: Directory to rename.

    Returns:
        The new path, in the same parent directory.

    Raises:
        OSError: If the rename fails (e.g. the source does not exist).
    """
    source = Path(path)
    target = source.with_name(_random_name())
    source.rename(target)
    logger.debug("Obfuscated directory %s -> %s", source, target.name)
    return target
