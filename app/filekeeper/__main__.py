"""Allow running filekeeper with ``python -m filekeeper``."""

from filekeeper.cli.main import app

app(prog_name="filekeeper")
