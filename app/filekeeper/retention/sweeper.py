"""Retention sweep engine.

Sweeps one directory tree per policy in two phases:

1. File pass: walk the tree, match non-directory entries against the
   policy's glob and delete (or report) those modified before the
   cutoff.
2. Directory pass: when enabled, collect every subdirectory in a single
   pre-order walk and visit them in reverse, so children are checked
   before their parents, removing the ones that are empty.

Separating the passes guarantees every file decision is final before
any directory is tested for emptiness.
"""

import logging
import os
import stat
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from filekeeper.models.config import DirectoryPolicy, SecurityPolicy
from filekeeper.retention.duration import DurationError, parse_duration
from filekeeper.retention.emptiness import is_dir_empty
from filekeeper.retention.models import EntryKind, SweepOutcome, SweepRecord, SweepReport
from filekeeper.retention.obfuscate import obfuscate_directory, obfuscate_file
from filekeeper.retention.overwrite import secure_delete
from filekeeper.retention.patterns import PatternError, match_pattern

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Reporter = Callable[[SweepRecord], None]


class SweepError(Exception):
    """Raised when a policy cannot be swept at all.

    Only an unparseable retention period or an inaccessible root
    directory abort a sweep; per-entry failures are recorded instead.
    """


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RetentionSweeper:
    """Applies directory retention policies.

    Execution is strictly sequential. Per-entry failures are logged once
    and recorded; they never abort the sweep and are never retried.

    Args:
        security: Dry-run, secure delete and obfuscation settings.
        clock: Returns the current time; defaults to ``datetime.now(UTC)``.
        reporter: Called with every record as soon as it is decided.
    """

    def __init__(
        self,
        security: SecurityPolicy,
        *,
        clock: Clock | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self._security = security
        self._clock = clock or _utcnow
        self._reporter = reporter

    def sweep(self, policy: DirectoryPolicy) -> SweepReport:
        """Sweep a single directory tree.

        Args:
            policy: Directory policy to apply.

        Returns:
            SweepReport with one record per visited entry.

        Raises:
            SweepError: If the retention period is invalid or the root
                directory cannot be accessed.
        """
        # Path("") is the working directory
        if not policy.path.strip():
            msg = f"cannot access directory '{policy.path}': empty path"
            raise SweepError(msg)

        root = Path(policy.path)
        logger.info("Processing directory: %s", root)

        try:
            retention = parse_duration(policy.retention_period)
        except DurationError as e:
            msg = f"invalid retention period '{policy.retention_period}': {e}"
            raise SweepError(msg) from e

        try:
            cutoff = self._clock() - retention
        except OverflowError as e:
            msg = (
                f"retention period '{policy.retention_period}' "
                "exceeds the representable range"
            )
            raise SweepError(msg) from e
        logger.info(
            "Retention period: %s (removing files before %s)",
            policy.retention_period,
            cutoff.isoformat(timespec="seconds"),
        )

        self._check_root(root)

        report = SweepReport(root=root, cutoff=cutoff)
        self._sweep_files(root, policy, cutoff, report)

        if policy.remove_empty_dirs:
            self._prune_directories(root, policy, report)

        logger.info(
            "Finished processing directory %s: %d deleted, %d would delete, %d failed",
            root,
            report.deleted,
            report.would_delete,
            report.failed,
        )
        return report

    # === Phase A: files ===

    def _sweep_files(
        self,
        root: Path,
        policy: DirectoryPolicy,
        cutoff: datetime,
        report: SweepReport,
    ) -> None:
        """Walk the tree and process every non-directory entry."""
        for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
            current = Path(dirpath)

            # Symlinks to directories are entries, never followed
            links = [d for d in dirnames if (current / d).is_symlink()]
            dirnames[:] = sorted(d for d in dirnames if d not in links)
            if policy.exclude_subdirs:
                dirnames.clear()

            for name in sorted(filenames + links):
                self._process_file(current / name, policy, cutoff, report)

        logger.info("File pass complete for %s", root)

    def _process_file(
        self,
        path: Path,
        policy: DirectoryPolicy,
        cutoff: datetime,
        report: SweepReport,
    ) -> None:
        """Evaluate a single non-directory entry."""
        if policy.file_pattern:
            try:
                matched = match_pattern(policy.file_pattern, path.name)
            except PatternError as e:
                logger.error(
                    "Error matching pattern '%s' for file %s: %s", policy.file_pattern, path, e
                )
                self._record(report, path, EntryKind.FILE, SweepOutcome.SKIPPED, detail=str(e))
                return
            if not matched:
                logger.debug("Skipping %s: does not match '%s'", path, policy.file_pattern)
                self._record(
                    report, path, EntryKind.FILE, SweepOutcome.SKIPPED, detail="pattern mismatch"
                )
                return

        try:
            st = path.lstat()
        except OSError as e:
            logger.error("Error accessing path %s: %s", path, e)
            self._record(report, path, EntryKind.FILE, SweepOutcome.SKIPPED, detail=str(e))
            return

        mtime = datetime.fromtimestamp(st.st_mtime, tz=UTC)
        if not mtime < cutoff:
            logger.debug("Keeping %s (modified: %s)", path, mtime.isoformat(timespec="seconds"))
            self._record(
                report, path, EntryKind.FILE, SweepOutcome.SKIPPED, mtime=mtime, detail="retained"
            )
            return

        if self._security.dry_run:
            logger.info(
                "Would delete file: %s (modified: %s)", path, mtime.isoformat(timespec="seconds")
            )
            self._record(report, path, EntryKind.FILE, SweepOutcome.WOULD_DELETE, mtime=mtime)
            return

        self._delete_file(path, st, mtime, report)

    def _delete_file(
        self,
        path: Path,
        st: os.stat_result,
        mtime: datetime,
        report: SweepReport,
    ) -> None:
        """Remove a candidate file, optionally obfuscated and overwritten."""
        secure = self._security.secure_delete
        target = path

        if secure.obfuscate_filenames:
            try:
                target = obfuscate_file(path)
            except OSError as e:
                logger.error("Error obfuscating file name %s: %s", path, e)
                self._record(
                    report, path, EntryKind.FILE, SweepOutcome.FAILED, mtime=mtime, detail=str(e)
                )
                return

        # Only regular files are overwritten; links and special files are unlinked
        overwrite = secure.enabled and stat.S_ISREG(st.st_mode)

        try:
            if overwrite:
                secure_delete(target, secure.passes)
            else:
                target.unlink()
        except OSError as e:
            verb = "securely deleting" if overwrite else "deleting"
            logger.error("Error %s file %s: %s", verb, path, e)
            self._record(
                report, path, EntryKind.FILE, SweepOutcome.FAILED, mtime=mtime, detail=str(e)
            )
            return

        logger.info("%s file: %s", "Securely deleted" if overwrite else "Deleted", path)
        self._record(report, path, EntryKind.FILE, SweepOutcome.DELETED, mtime=mtime)

    # === Phase B: empty directories ===

    def _prune_directories(self, root: Path, policy: DirectoryPolicy, report: SweepReport) -> None:
        """Remove empty subdirectories, deepest first."""
        logger.info("Checking for empty directories in %s", root)

        if policy.exclude_subdirs:
            # Every directory below the root is excluded
            logger.debug("Subdirectories excluded, nothing to prune in %s", root)
            return

        directories = self._collect_directories(root)

        # Pre-order discovery reversed: children come before parents
        for directory in reversed(directories):
            try:
                empty = is_dir_empty(directory)
            except OSError as e:
                logger.error("Error checking if directory %s is empty: %s", directory, e)
                self._record(
                    report, directory, EntryKind.DIRECTORY, SweepOutcome.SKIPPED, detail=str(e)
                )
                continue

            if not empty:
                self._record(
                    report, directory, EntryKind.DIRECTORY, SweepOutcome.SKIPPED, detail="not empty"
                )
                continue

            self._remove_directory(directory, report)

        logger.info("Directory pass complete for %s", root)

    def _collect_directories(self, root: Path) -> list[Path]:
        """List every directory under root (root excluded) in pre-order."""
        directories: list[Path] = []
        for dirpath, dirnames, _ in os.walk(root, onerror=self._on_walk_error):
            dirnames.sort()
            current = Path(dirpath)
            if current != root:
                directories.append(current)
        return directories

    def _remove_directory(self, directory: Path, report: SweepReport) -> None:
        """Remove an empty directory, honouring dry-run and obfuscation."""
        if self._security.dry_run:
            logger.info("Would remove empty directory: %s", directory)
            self._record(report, directory, EntryKind.DIRECTORY, SweepOutcome.WOULD_DELETE)
            return

        target = directory
        if self._security.secure_delete.obfuscate_filenames:
            try:
                target = obfuscate_directory(directory)
            except OSError as e:
                logger.error("Error obfuscating directory name %s: %s", directory, e)
                self._record(
                    report, directory, EntryKind.DIRECTORY, SweepOutcome.FAILED, detail=str(e)
                )
                return

        try:
            target.rmdir()
        except OSError as e:
            logger.error("Error removing directory %s: %s", directory, e)
            self._record(report, directory, EntryKind.DIRECTORY, SweepOutcome.FAILED, detail=str(e))
            return

        logger.info("Removed empty directory: %s", directory)
        self._record(report, directory, EntryKind.DIRECTORY, SweepOutcome.DELETED)

    # === Helpers ===

    def _check_root(self, root: Path) -> None:
        """Ensure the root directory exists and can be listed.

        Raises:
            SweepError: If the root is missing, not a directory, or unreadable.
        """
        try:
            st = root.stat()
        except OSError as e:
            msg = f"cannot access directory {root}: {e}"
            raise SweepError(msg) from e

        if not stat.S_ISDIR(st.st_mode):
            msg = f"not a directory: {root}"
            raise SweepError(msg)

        try:
            with os.scandir(root):
                pass
        except OSError as e:
            msg = f"cannot open directory {root}: {e}"
            raise SweepError(msg) from e

    def _on_walk_error(self, error: OSError) -> None:
        logger.error("Error accessing path %s: %s", error.filename, error)

    def _record(
        self,
        report: SweepReport,
        path: Path,
        kind: EntryKind,
        outcome: SweepOutcome,
        *,
        mtime: datetime | None = None,
        detail: str | None = None,
    ) -> None:
        record = SweepRecord(path=path, kind=kind, outcome=outcome, mtime=mtime, detail=detail)
        report.records.append(record)
        if self._reporter is not None:
            self._reporter(record)


def sweep(
    policy: DirectoryPolicy,
    security: SecurityPolicy,
    *,
    reporter: Reporter | None = None,
) -> SweepReport:
    """Sweep one directory policy with the given security settings.

    Convenience wrapper around RetentionSweeper.

    Raises:
        SweepError: If the retention period is invalid or the root
            directory cannot be accessed.
    """
    return RetentionSweeper(security, reporter=reporter).sweep(policy)
