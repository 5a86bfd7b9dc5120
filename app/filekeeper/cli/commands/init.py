"""Init command implementation.

Writes a commented example configuration next to the configuration path.
"""

from pathlib import Path
from typing import Annotated

import typer

from filekeeper.cli.types import get_runtime_context
from filekeeper.core.config import (
    ConfigError,
    get_example_path,
    render_example_config,
    write_example_config,
)
from filekeeper.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Create an example configuration file.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration path; the example is written to <path>.example.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Print the example configuration instead of writing it.",
        ),
    ] = False,
) -> None:
    """Create a default configuration file.

    The example is written next to the configuration path with an
    ".example" suffix, so an existing configuration is never replaced.
    Review it and rename it to activate it.

    Examples:
        filekeeper init                          # Example for the default path
        filekeeper init --config ./keep.yaml     # Writes ./keep.yaml.example
        filekeeper init --dry-run                # Print without writing
    """
    if ctx.invoked_subcommand is not None:
        return

    context = get_runtime_context(ctx)
    config_path = config or context.config_path

    if dry_run:
        typer.echo(render_example_config(context), nl=False)
        print_info(f"[DRY-RUN] Would write {get_example_path(config_path)}")
        return

    try:
        example_path = write_example_config(config_path, context)
    except ConfigError as e:
        print_error(f"Error creating example configuration: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Created example configuration file: {example_path}")
    print_info(f"Please review and rename to {config_path} when ready.")
