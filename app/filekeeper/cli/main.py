"""filekeeper command line.

``filekeeper`` alone sweeps with the default configuration; the
subcommands create that configuration and the systemd units that run the
sweep daily.
"""

from typing import Annotated

import typer

from filekeeper import __version__
from filekeeper.cli.commands import init, run, systemd
from filekeeper.core.config import config_exists
from filekeeper.core.paths import resolve_context
from filekeeper.utils.formatting import print_info

app = typer.Typer(
    name="filekeeper",
    help="Remove files older than a specified retention period.",
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(run.app, name="run")
app.add_typer(init.app, name="init")
app.add_typer(systemd.app, name="systemd")


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"FileKeeper v{__version__}")
        raise typer.Exit()


def _run_default(ctx: typer.Context) -> None:
    """Sweep with the default configuration, or explain how to create it."""
    if not config_exists(ctx.obj["context"].config_path):
        typer.echo(ctx.get_help())
        print_info("Run 'filekeeper init' to create a default configuration file.")
        raise typer.Exit()

    run.run_sweeps(ctx)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Also print log messages to the terminal."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Do not print the per-directory results tables."),
    ] = False,
) -> None:
    """filekeeper - remove files older than a retention period.

    Without a command, runs the cleanup with the default configuration
    (/etc/filekeeper/filekeeper.yaml for root, ~/.config/filekeeper.yaml
    otherwise), or shows this help if that file does not exist yet.
    """
    ctx.ensure_object(dict)
    ctx.obj.update(verbose=verbose, quiet=quiet, context=resolve_context())

    if ctx.invoked_subcommand is None:
        _run_default(ctx)
