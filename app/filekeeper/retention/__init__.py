"""Retention sweep engine.

This module provides retention period parsing, the two-phase directory
sweeper, and the secure deletion helpers it relies on.
"""

from filekeeper.retention.duration import DurationError, parse_duration
from filekeeper.retention.emptiness import is_dir_empty
from filekeeper.retention.models import EntryKind, SweepOutcome, SweepRecord, SweepReport
from filekeeper.retention.obfuscate import obfuscate_directory, obfuscate_file
from filekeeper.retention.overwrite import fill_pattern, secure_delete
from filekeeper.retention.patterns import PatternError, match_pattern
from filekeeper.retention.sweeper import RetentionSweeper, SweepError, sweep

__all__ = [
    "DurationError",
    "EntryKind",
    "PatternError",
    "RetentionSweeper",
    "SweepError",
    "SweepOutcome",
    "SweepRecord",
    "SweepReport",
    "fill_pattern",
    "is_dir_empty",
    "match_pattern",
    "obfuscate_directory",
    "obfuscate_file",
    "parse_duration",
    "secure_delete",
    "sweep",
]
