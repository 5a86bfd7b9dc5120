"""Data models for filekeeper.

This module exports the configuration models.
"""

from filekeeper.models.config import (
    Config,
    DirectoryPolicy,
    GeneralConfig,
    LoggingConfig,
    SecureDeleteConfig,
    SecurityPolicy,
)

__all__ = [
    "Config",
    "DirectoryPolicy",
    "GeneralConfig",
    "LoggingConfig",
    "SecureDeleteConfig",
    "SecurityPolicy",
]
