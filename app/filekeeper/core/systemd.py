"""Systemd unit templating and installation.

filekeeper does not schedule itself; a oneshot service started by a
daily timer runs ``filekeeper run``. Root installs system units with
sandboxing, other users install units for their user instance.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from string import Template

from filekeeper.core.paths import APP_NAME, RuntimeContext

logger = logging.getLogger(__name__)

SERVICE_NAME = f"{APP_NAME}.service"
TIMER_NAME = f"{APP_NAME}.timer"


class SystemdInstallError(Exception):
    """Raised when unit files cannot be written."""


@dataclass(frozen=True, slots=True)
class InstalledUnits:
    """Paths of installed unit files.

    Attributes:
        service_path: Written service unit.
        timer_path: Written timer unit.
        user_mode: Whether the units target the user instance.
    """

    service_path: Path
    timer_path: Path
    user_mode: bool

    @property
    def activation_commands(self) -> list[str]:
        """Commands that load and enable the timer."""
        systemctl = "systemctl --user" if self.user_mode else "systemctl"
        return [
            f"{systemctl} daemon-reload",
            f"{systemctl} enable --now {TIMER_NAME}",
        ]


def _read_template(name: str) -> str:
    return resources.files("filekeeper.data").joinpath(name).read_text(encoding="utf-8")


def _write_path_entry(path: str) -> str:
    """Format one ``ReadWritePaths=`` entry.

    The ``-`` prefix lets the service start when the path does not exist.
    Entries with whitespace, quotes or backslashes are double-quoted, and
    ``%`` is escaped so it is not read as a unit specifier.
    """
    entry = "-" + path.replace("%", "%%")
    if any(c.isspace() or c in "\"'\\" for c in entry):
        entry = '"' + entry.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return entry


def render_service(user_mode: bool, write_paths: Iterable[str] = ()) -> str:
    """Render the service unit.

    The system unit runs with ``ProtectSystem=strict``, so the swept
    directories and the log directory must be listed in
    ``ReadWritePaths=`` for deletions to succeed.

    Args:
        user_mode: Render the user-instance variant (no sandboxing).
        write_paths: Paths the system service must be able to modify.

    Returns:
        Unit file text.
    """
    if user_mode:
        return _read_template(f"{APP_NAME}-user.service")

    paths = sorted(set(write_paths))
    if paths:
        line = "ReadWritePaths=" + " ".join(_write_path_entry(p) for p in paths)
    else:
        line = "# ReadWritePaths=-/var/log -/path/to/dir1"
    return Template(_read_template(SERVICE_NAME)).substitute(read_write_paths=line)


def render_timer() -> str:
    """Render the daily timer unit."""
    return _read_template(TIMER_NAME)


def format_templates(write_paths: Iterable[str] = ()) -> str:
    """Format both system units with explanatory headers.

    Returns:
        Text suitable for printing to stdout.
    """
    location = (
        "# Save to /etc/systemd/system/ (for system-wide) "
        "or ~/.config/systemd/user/ (for user)"
    )
    return "\n".join(
        [
            f"# FileKeeper Service File ({SERVICE_NAME})",
            location,
            "",
            render_service(user_mode=False, write_paths=write_paths),
            f"# FileKeeper Timer File ({TIMER_NAME})",
            location,
            "",
            render_timer(),
        ]
    )


def install_units(context: RuntimeContext, write_paths: Iterable[str] = ()) -> InstalledUnits:
    """Write the service and timer units for the current user.

    Args:
        context: Runtime context selecting system or user installation.
        write_paths: Paths the system service must be able to modify.

    Returns:
        InstalledUnits describing the written files.

    Raises:
        SystemdInstallError: If the directory or files cannot be written.
    """
    unit_dir = context.systemd_dir
    service_path = unit_dir / SERVICE_NAME
    timer_path = unit_dir / TIMER_NAME

    try:
        unit_dir.mkdir(parents=True, exist_ok=True)
        service_path.write_text(
            render_service(context.user_mode, write_paths=write_paths), encoding="utf-8"
        )
        timer_path.write_text(render_timer(), encoding="utf-8")
    except OSError as e:
        raise SystemdInstallError(f"Failed to write systemd units to {unit_dir}: {e}") from e

    logger.info("Installed %s and %s in %s", SERVICE_NAME, TIMER_NAME, unit_dir)
    return InstalledUnits(
        service_path=service_path,
        timer_path=timer_path,
        user_mode=context.user_mode,
    )
