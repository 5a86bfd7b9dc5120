"""Run command implementation.

Loads the configuration and sweeps every configured directory.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from filekeeper import __version__
from filekeeper.cli.display import create_report_table, echo_record, print_sweep_summary
from filekeeper.cli.types import get_flag, get_runtime_context
from filekeeper.core.config import require_config
from filekeeper.core.log import LoggingSetupError, setup_logging
from filekeeper.retention.models import SweepReport
from filekeeper.retention.sweeper import RetentionSweeper, SweepError
from filekeeper.utils.formatting import console, print_error, print_info, print_warning

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Remove files older than their retention period.",
    invoke_without_command=True,
)


def run_sweeps(
    ctx: typer.Context,
    config_path: Path | None = None,
    *,
    dry_run: bool = False,
    force: bool = False,
) -> None:
    """Sweep every directory policy of the configuration.

    A policy that cannot be swept (bad root, bad retention period) is
    reported and the run continues with the next one.

    Args:
        ctx: Current Typer context.
        config_path: Configuration file. If None, uses the default path.
        dry_run: Report candidates without deleting, whatever the config says.
        force: Run even if disabled in the configuration.

    Raises:
        typer.Exit: With code 1 if the configuration or logging cannot be
            set up, or if any policy could not be swept.
    """
    context = get_runtime_context(ctx)
    quiet = get_flag(ctx, "quiet")
    path = config_path or context.config_path

    config = require_config(path)

    if not config.general.enabled and not force:
        print_info("Program is disabled in configuration. Use --force to run anyway.")
        return

    try:
        setup_logging(config.general.logging, context, verbose=get_flag(ctx, "verbose"))
    except LoggingSetupError as e:
        print_error(f"Error setting up logger: {e}")
        raise typer.Exit(code=1) from e

    security = config.security
    if dry_run:
        security = security.model_copy(update={"dry_run": True})

    logger.info("Starting filekeeper v%s", __version__)
    logger.info("Configuration loaded from: %s", path)
    if security.dry_run:
        logger.info("Running in dry-run mode - no files will be deleted")
        print_info("Running in dry-run mode - no files will be deleted")

    if not config.directories:
        print_warning(f"No directories configured in {path}")

    sweeper = RetentionSweeper(security, reporter=echo_record)
    reports: list[SweepReport] = []
    failed_policies = 0

    for policy in config.directories:
        try:
            report = sweeper.sweep(policy)
        except SweepError as e:
            logger.error("Error processing directory %s: %s", policy.path, e)
            print_error(f"Error processing directory {policy.path}: {e}")
            failed_policies += 1
            continue

        reports.append(report)
        if not quiet and report.candidates:
            console.print(create_report_table(report))

    logger.info("Finished processing all directories")
    print_sweep_summary(reports, failed_policies, dry_run=security.dry_run)

    if failed_policies:
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def run(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Alternative configuration file path.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Run without actually deleting any files.",
        ),
    ] = False,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Run even if disabled in the configuration.",
        ),
    ] = False,
) -> None:
    """Remove files and empty directories older than their retention period.

    Examples:
        filekeeper run                       # Run with the default configuration
        filekeeper run --dry-run             # Simulate deletion without removing files
        filekeeper run --config ./keep.yaml  # Use another configuration file
    """
    if ctx.invoked_subcommand is not None:
        return

    run_sweeps(ctx, config, dry_run=dry_run, force=force)
