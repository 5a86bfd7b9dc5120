"""Bundled templates for filekeeper (example config, systemd units)."""
