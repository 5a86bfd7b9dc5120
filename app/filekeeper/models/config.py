"""Configuration models for filekeeper.yaml.

This module defines the Pydantic models representing the YAML
configuration: general settings, the list of directory policies and
the security settings applied to every sweep.

Omitted keys take the values written by ``filekeeper init``.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Type alias for accepted log levels
LogLevelType = Literal["debug", "info", "warn", "warning", "error"]


class LoggingConfig(BaseModel):
    """Logging section of the general settings.

    Attributes:
        enabled: Write log lines to a file.
        level: Minimum level written to the log file.
        file: Log file path. If None, a default depending on whether the
            program runs as root is used.
    """

    model_config = ConfigDict(frozen=True)

    enabled: Annotated[bool, Field(description="Enable logging to file")] = True
    level: Annotated[LogLevelType, Field(description="Log level")] = "info"
    file: Annotated[str | None, Field(description="Path to log file")] = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept log levels in any letter case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class GeneralConfig(BaseModel):
    """General settings.

    Attributes:
        enabled: Whether sweeps run at all (``--force`` overrides).
        logging: Logging settings.
    """

    model_config = ConfigDict(frozen=True)

    enabled: Annotated[bool, Field(description="Enable program operation")] = True
    logging: Annotated[
        LoggingConfig,
        Field(default_factory=LoggingConfig, description="Logging settings"),
    ]


class DirectoryPolicy(BaseModel):
    """Retention policy for a single directory tree.

    Attributes:
        path: Root directory to sweep. The root itself is never removed.
        retention_period: Maximum age, e.g. "30d", "24h", "60m".
        file_pattern: Shell glob matched against base names; empty
            matches every file.
        exclude_subdirs: Only consider files directly inside ``path``.
        remove_empty_dirs: Remove empty subdirectories after the file pass.
    """

    model_config = ConfigDict(frozen=True)

    path: Annotated[str, Field(description="Directory to process")]
    retention_period: Annotated[str, Field(description="Retention period (30d, 24h, 60m)")]
    file_pattern: Annotated[str, Field(description="File matching pattern")] = ""
    exclude_subdirs: Annotated[bool, Field(description="Do not descend into subdirectories")] = (
        False
    )
    remove_empty_dirs: Annotated[bool, Field(description="Remove empty directories")] = False


class SecureDeleteConfig(BaseModel):
    """Secure deletion settings.

    Attributes:
        enabled: Overwrite file content before unlinking.
        passes: Number of overwrite passes; 0 means plain unlink.
        obfuscate_filenames: Rename entries to random names before
            removal. Independent of ``enabled``.
    """

    model_config = ConfigDict(frozen=True)

    enabled: Annotated[bool, Field(description="Enable secure deletion")] = False
    passes: Annotated[int, Field(ge=0, description="Number of overwrite passes")] = 3
    obfuscate_filenames: Annotated[
        bool,
        Field(description="Rename entries to random names before deletion"),
    ] = False


class SecurityPolicy(BaseModel):
    """Security settings shared by all directory policies.

    Attributes:
        dry_run: Report candidates without touching the filesystem.
        secure_delete: Overwrite and obfuscation settings.
    """

    model_config = ConfigDict(frozen=True)

    dry_run: Annotated[bool, Field(description="Only report what would be deleted")] = False
    secure_delete: Annotated[
        SecureDeleteConfig,
        Field(default_factory=SecureDeleteConfig, description="Secure deletion settings"),
    ]


class Config(BaseModel):
    """Complete filekeeper configuration.

    Attributes:
        general: General settings.
        directories: Directory policies, swept in order.
        security: Security settings.
    """

    model_config = ConfigDict(frozen=True)

    general: Annotated[
        GeneralConfig,
        Field(default_factory=GeneralConfig, description="General settings"),
    ]
    directories: Annotated[
        list[DirectoryPolicy],
        Field(default_factory=list, description="Directories to process"),
    ]
    security: Annotated[
        SecurityPolicy,
        Field(default_factory=SecurityPolicy, description="Security settings"),
    ]
