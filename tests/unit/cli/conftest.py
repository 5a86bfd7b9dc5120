"""Fixtures for CLI tests."""

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
import yaml
from filekeeper.core.paths import RuntimeContext

ConfigWriter = Callable[..., Path]


@pytest.fixture
def cli_context(runtime_context: RuntimeContext) -> Iterator[RuntimeContext]:
    """Make the CLI resolve every default location into tmp_path."""
    with patch("filekeeper.cli.main.resolve_context", return_value=runtime_context):
        yield runtime_context


@pytest.fixture
def write_config(runtime_context: RuntimeContext) -> ConfigWriter:
    """Factory writing a YAML configuration (default path unless given)."""

    def _write(
        directories: list[dict[str, Any]],
        *,
        path: Path | None = None,
        general: dict[str, Any] | None = None,
        security: dict[str, Any] | None = None,
    ) -> Path:
        target = path or runtime_context.config_path
        data = {
            "general": general
            or {"enabled": True, "logging": {"file": str(runtime_context.log_path)}},
            "directories": directories,
            "security": security or {"dry_run": False},
        }
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(yaml.safe_dump(data), encoding="utf-8")
        return target

    return _write
