"""filekeeper - retention-based file cleanup.

Removes files and empty directories that have outlived a configured
retention period, with optional overwrite and name obfuscation before
deletion.
"""

__version__ = "0.1.4"
