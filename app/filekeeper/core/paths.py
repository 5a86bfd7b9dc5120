"""Runtime path resolution for filekeeper.

Paths depend on whether the program runs as root. The decision is made
once at start-up by ``resolve_context()`` and carried around in an
immutable RuntimeContext.

Root:
- Config: /etc/filekeeper/filekeeper.yaml
- Log: /var/log/filekeeper.log
- Systemd units: /etc/systemd/system/

Regular user (XDG):
- Config: ~/.config/filekeeper.yaml
- Log: ~/.local/share/filekeeper/filekeeper.log
- Systemd units: ~/.config/systemd/user/
"""

import os
from dataclasses import dataclass
from pathlib import Path

# Application identifier for file and directory naming
APP_NAME = "filekeeper"

CONFIG_FILENAME = f"{APP_NAME}.yaml"
LOG_FILENAME = f"{APP_NAME}.log"

SYSTEM_CONFIG_DIR = Path("/etc") / APP_NAME
SYSTEM_LOG_FILE = Path("/var/log") / LOG_FILENAME
SYSTEM_SYSTEMD_DIR = Path("/etc/systemd/system")


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    """Resolved locations for the current user.

    Attributes:
        is_root: Whether the process runs with uid 0.
        config_path: Default configuration file.
        log_path: Default log file, used when the config names none.
        systemd_dir: Directory receiving installed unit files.
    """

    is_root: bool
    config_path: Path
    log_path: Path
    systemd_dir: Path

    @property
    def user_mode(self) -> bool:
        """Whether systemd units target the user instance."""
        return not self.is_root


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting its environment override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the base directory (not application-specific).
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def get_config_home() -> Path:
    """Get the user configuration base directory.

    Returns:
        Path to ~/.config (or XDG_CONFIG_HOME).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Get the application data directory.

    Returns:
        Path to ~/.local/share/filekeeper/ (or XDG_DATA_HOME/filekeeper/).
    """
    return _get_xdg_base("XDG_DATA_HOME", ".local/share") / APP_NAME


def is_root_user() -> bool:
    """Check whether the process runs as root."""
    return os.geteuid() == 0


def resolve_context(is_root: bool | None = None) -> RuntimeContext:
    """Resolve default paths for the current user.

    Args:
        is_root: Override root detection. If None, uses the effective uid.

    Returns:
        RuntimeContext with config, log and systemd locations.
    """
    root = is_root_user() if is_root is None else is_root

    if root:
        return RuntimeContext(
            is_root=True,
            config_path=SYSTEM_CONFIG_DIR / CONFIG_FILENAME,
            log_path=SYSTEM_LOG_FILE,
            systemd_dir=SYSTEM_SYSTEMD_DIR,
        )

    config_home = get_config_home()
    return RuntimeContext(
        is_root=False,
        config_path=config_home / CONFIG_FILENAME,
        log_path=get_data_dir() / LOG_FILENAME,
        systemd_dir=config_home / "systemd" / "user",
    )
