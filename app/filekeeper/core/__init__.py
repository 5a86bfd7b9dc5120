"""Core services: runtime paths, configuration, logging, systemd units and theming."""
