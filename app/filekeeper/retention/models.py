"""Sweep result models.

A sweep produces one record per visited entry. The records mirror the
decisions written to the log and let callers render a summary.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Type of a visited entry.

    Attributes:
        FILE: Any non-directory entry (regular file, symlink, fifo, ...).
        DIRECTORY: Directory considered during empty-directory pruning.
    """

    FILE = "file"
    DIRECTORY = "directory"


class SweepOutcome(str, Enum):
    """Decision taken for a visited entry.

    Attributes:
        SKIPPED: Not a candidate (pattern mismatch, too recent, not empty,
            or inaccessible).
        WOULD_DELETE: Candidate reported in dry-run mode.
        DELETED: Candidate removed from the filesystem.
        FAILED: Candidate whose removal failed.
    """

    SKIPPED = "skipped"
    WOULD_DELETE = "would_delete"
    DELETED = "deleted"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SweepRecord:
    """Outcome of a single entry.

    Attributes:
        path: Original path of the entry (before any obfuscation).
        kind: File or directory.
        outcome: Decision taken.
        mtime: Modification time, None if it could not be read or does
            not apply.
        detail: Reason for a skip, or error message for a failure.
    """

    path: Path
    kind: EntryKind
    outcome: SweepOutcome
    mtime: datetime | None = None
    detail: str | None = None

    @property
    def is_candidate(self) -> bool:
        """Whether the entry qualified for deletion."""
        return self.outcome != SweepOutcome.SKIPPED


@dataclass(slots=True)
class SweepReport:
    """All records produced by sweeping one directory policy.

    Attributes:
        root: Root directory of the policy.
        cutoff: Entries modified before this instant were candidates.
        records: Records in visiting order.
    """

    root: Path
    cutoff: datetime
    records: list[SweepRecord] = field(default_factory=list)

    def _count(self, outcome: SweepOutcome) -> int:
        return sum(1 for r in self.records if r.outcome == outcome)

    @property
    def deleted(self) -> int:
        """Number of entries removed."""
        return self._count(SweepOutcome.DELETED)

    @property
    def failed(self) -> int:
        """Number of entries whose removal failed."""
        return self._count(SweepOutcome.FAILED)

    @property
    def would_delete(self) -> int:
        """Number of dry-run candidates."""
        return self._count(SweepOutcome.WOULD_DELETE)

    @property
    def skipped(self) -> int:
        """Number of entries left alone."""
        return self._count(SweepOutcome.SKIPPED)

    @property
    def candidates(self) -> list[SweepRecord]:
        """Records of entries that qualified for deletion."""
        return [r for r in self.records if r.is_candidate]
