"""Logging setup for sweeps.

Configures the ``filekeeper`` logger from the ``general.logging``
section: an append-only log file, optionally mirrored to the terminal
through Rich when running verbosely.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from filekeeper.core.paths import RuntimeContext
from filekeeper.models.config import LoggingConfig

PACKAGE_LOGGER = "filekeeper"

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
_FILE_FORMAT = "%(asctime)s %(message)s"
_DEBUG_FILE_FORMAT = "%(asctime)s %(filename)s:%(lineno)d: %(message)s"


class LoggingSetupError(Exception):
    """Raised when the log file cannot be prepared."""


def get_log_path(config: LoggingConfig, context: RuntimeContext) -> Path:
    """Get the log file path, falling back to the context default.

    Returns:
        Configured log file, or the default for the current user.
    """
    return Path(config.file) if config.file else context.log_path


def setup_logging(
    config: LoggingConfig,
    context: RuntimeContext,
    *,
    verbose: bool = False,
) -> logging.Logger:
    """Configure the package logger.

    Handlers installed by a previous call are closed and replaced, so the
    function can be called once per run (or per test).

    Args:
        config: Logging settings from the configuration file.
        context: Runtime context providing the default log path.
        verbose: Also log to the terminal (stderr) with Rich.

    Returns:
        The configured ``filekeeper`` logger.

    Raises:
        LoggingSetupError: If the log directory or file cannot be opened.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    _reset_handlers(package_logger)

    level = _LEVELS.get(config.level, logging.INFO)
    package_logger.setLevel(level)

    if config.enabled:
        package_logger.addHandler(_create_file_handler(get_log_path(config, context), level))

    if verbose:
        rich_handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True
        )
        rich_handler.setLevel(level)
        package_logger.addHandler(rich_handler)

    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())

    return package_logger


def _create_file_handler(log_path: Path, level: int) -> logging.FileHandler:
    """Open the log file in append mode.

    Raises:
        LoggingSetupError: If the directory or file cannot be created.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"failed to create log directory {log_path.parent}: {e}"
        raise LoggingSetupError(msg) from e

    try:
        handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        msg = f"failed to open log file {log_path}: {e}"
        raise LoggingSetupError(msg) from e

    fmt = _DEBUG_FILE_FORMAT if level <= logging.DEBUG else _FILE_FORMAT
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    handler.setLevel(level)
    return handler


def _reset_handlers(package_logger: logging.Logger) -> None:
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
