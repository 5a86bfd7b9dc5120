"""CLI commands for filekeeper.

This package contains all subcommand implementations.
"""

from filekeeper.cli.commands import init, run, systemd

__all__ = ["init", "run", "systemd"]
