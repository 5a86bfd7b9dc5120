"""Systemd integration commands.

Installs or prints the service and timer units that run filekeeper
daily.
"""

import typer

from filekeeper.cli.types import get_runtime_context
from filekeeper.core.config import ConfigError, load_config
from filekeeper.core.log import get_log_path
from filekeeper.core.paths import RuntimeContext
from filekeeper.core.systemd import SystemdInstallError, format_templates, install_units
from filekeeper.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Install or print systemd service and timer units.",
    no_args_is_help=True,
)


def _collect_write_paths(context: RuntimeContext) -> list[str]:
    """Paths the sandboxed system service must be allowed to modify.

    Reads the configured directories and the log directory from the
    default configuration, if it can be loaded.
    """
    if context.user_mode or not context.config_path.exists():
        return []

    try:
        config = load_config(context.config_path)
    except ConfigError as e:
        print_warning(f"Could not read {context.config_path}, ReadWritePaths left empty: {e}")
        return []

    paths = [policy.path for policy in config.directories]
    if config.general.logging.enabled:
        paths.append(str(get_log_path(config.general.logging, context).parent))
    return paths


@app.command()
def install(ctx: typer.Context) -> None:
    """Create systemd service and timer files.

    Root installs system units in /etc/systemd/system; other users
    install user units in ~/.config/systemd/user.
    """
    context = get_runtime_context(ctx)

    try:
        units = install_units(context, write_paths=_collect_write_paths(context))
    except SystemdInstallError as e:
        print_error(f"Error creating systemd files: {e}")
        raise typer.Exit(code=1) from e

    print_success("Systemd files created successfully:")
    lines = [f"  - Service: {units.service_path}", f"  - Timer: {units.timer_path}"]
    lines += ["", "To activate, run:", *(f"  {command}" for command in units.activation_commands)]
    for line in lines:
        console.print(line, soft_wrap=True, highlight=False, markup=False)


@app.command()
def template(ctx: typer.Context) -> None:
    """Output systemd templates without creating files."""
    context = get_runtime_context(ctx)
    typer.echo(format_templates(_collect_write_paths(context)))
