"""Shared Rich display functions for sweep results.

Provides the live echo of sweep decisions, the per-directory results
table and the final summary printed by ``filekeeper run``.
"""

from rich.markup import escape
from rich.table import Table

from filekeeper.retention.models import EntryKind, SweepOutcome, SweepRecord, SweepReport
from filekeeper.utils.formatting import console, print_success

_OUTCOME_LABELS: dict[SweepOutcome, str] = {
    SweepOutcome.WOULD_DELETE: "[would_delete]would delete[/would_delete]",
    SweepOutcome.DELETED: "[deleted]deleted[/deleted]",
    SweepOutcome.FAILED: "[error]FAIL[/error]",
}


def _format_mtime(record: SweepRecord) -> str:
    return record.mtime.isoformat(timespec="seconds") if record.mtime else "-"


def echo_record(record: SweepRecord) -> None:
    """Echo a dry-run candidate to stdout.

    Other outcomes are only logged; they are summarised after the sweep.

    Args:
        record: Record produced by the sweeper.
    """
    if record.outcome != SweepOutcome.WOULD_DELETE:
        return

    if record.kind == EntryKind.DIRECTORY:
        line = f"Would remove empty directory: {record.path}"
    else:
        line = f"Would delete file: {record.path} (modified: {_format_mtime(record)})"
    console.print(escape(line), soft_wrap=True, highlight=False)


def create_report_table(report: SweepReport) -> Table:
    """Create a Rich table with the candidates of one sweep.

    Skipped entries are left out; only entries that qualified for
    deletion are listed.

    Args:
        report: Report returned by the sweeper.

    Returns:
        Rich Table configured for result display.
    """
    table = Table(
        title=escape(str(report.root)),
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=12, justify="center")
    table.add_column("Type", width=9)
    table.add_column("Path", overflow="fold")
    table.add_column("Modified", style="muted")
    table.add_column("Message")

    for record in report.candidates:
        table.add_row(
            _OUTCOME_LABELS[record.outcome],
            record.kind.value,
            escape(str(record.path)),
            _format_mtime(record),
            f"[muted]{escape(record.detail or '')}[/muted]",
        )

    return table


def print_sweep_summary(reports: list[SweepReport], failed_policies: int, dry_run: bool) -> None:
    """Print a summary of all sweeps of a run.

    Args:
        reports: Reports of the policies that were swept.
        failed_policies: Number of policies that could not be swept.
        dry_run: Whether the run was a dry run.
    """
    deleted = sum(r.deleted for r in reports)
    would_delete = sum(r.would_delete for r in reports)
    failed = sum(r.failed for r in reports)

    if dry_run:
        console.print(f"\nSummary: [would_delete]{would_delete} would be deleted[/would_delete]")
    elif failed == 0 and failed_policies == 0:
        print_success(f"Removed {deleted} expired entry(ies).")
    else:
        console.print(f"\n[success]{deleted} deleted[/success], [error]{failed} failed[/error]")

    if failed_policies:
        message = f"{failed_policies} directory policy(ies) could not be processed"
        console.print(f"[error]{message}[/error]")
