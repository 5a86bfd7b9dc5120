"""Command-line interface for filekeeper."""
