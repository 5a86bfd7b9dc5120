"""Multi-pass overwrite before deletion.

Overwrites the existing byte range of a file a configured number of
times before unlinking it. Each pass writes a reproducible pattern that
differs from the previous pass; the bytes are not cryptographically
random.

Overwriting in place only reaches the original blocks on storage that
does not remap writes (wear levelling, flash translation layers,
copy-on-write filesystems).
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

BUFFER_SIZE = 8192


def fill_pattern(pass_index: int, size: int = BUFFER_SIZE) -> bytes:
    """Build the scratch buffer written during one pass.

    Byte ``i`` of the buffer is ``(pass_index ^ i) & 0xFF``, so two
    consecutive passes differ at every offset.

    Args:
        pass_index: Zero-based pass number.
        size: Buffer length in bytes.

    Returns:
        The pattern bytes for this pass.
    """
    return bytes((pass_index ^ i) & 0xFF for i in range(size))


def secure_delete(path: Path | str, passes: int) -> None:
    """Overwrite a file ``passes`` times, then unlink it.

    With ``passes == 0`` the file is unlinked without being overwritten.
    Each pass is flushed and fsync-ed before the next one starts.

    Args:
        path: Regular file to destroy.
        passes: Number of overwrite passes (non-negative).

    Raises:
        ValueError: If passes is negative.
        OSError: On any open, seek, write, sync or unlink failure. The
            file is left in place, possibly partially overwritten.
    """
    if passes < 0:
        msg = f"Pass count must be non-negative, got {passes}"
        raise ValueError(msg)

    target = Path(path)

    # Write-only, no O_TRUNC: unreadable files can still be overwritten
    fd = os.open(target, os.O_WRONLY)
    with os.fdopen(fd, "wb") as f:
        size = os.fstat(f.fileno()).st_size

        for pass_index in range(passes):
            logger.debug("Secure delete pass %d/%d for %s", pass_index + 1, passes, target)
            buf = fill_pattern(pass_index)

            f.seek(0)
            remaining = size
            while remaining > 0:
                chunk = min(remaining, len(buf))
                f.write(buf[:chunk])
                remaining -= chunk

            f.flush()
            os.fsync(f.fileno())

    target.unlink()
