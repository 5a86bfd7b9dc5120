"""Console output for the CLI.

Results (dry-run candidates, tables, summaries) go to stdout; warnings and
errors go to stderr, so ``filekeeper run --dry-run > list.txt`` captures
only the candidates. Messages given to the ``print_*`` helpers are plain
text: brackets in paths are escaped, never parsed as Rich markup.
"""

import sys

from rich.console import Console
from rich.markup import escape

from filekeeper.core.theme import get_theme


def _make_console(stderr: bool = False) -> Console:
    stream = sys.stderr if stderr else sys.stdout
    # Full hex colours on terminals, Rich's own detection elsewhere
    color_system = "truecolor" if stream.isatty() else "auto"
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def print_info(message: str) -> None:
    console.print(f"[info]{escape(message)}[/info]")


def print_success(message: str) -> None:
    console.print(f"[success]{escape(message)}[/success]")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]Warning:[/warning] {escape(message)}")


def print_error(message: str) -> None:
    err_console.print(f"[error]Error:[/error] {escape(message)}")
