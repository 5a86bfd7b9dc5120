"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import logging
import os
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from filekeeper.core.paths import RuntimeContext

AgedFileFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging between tests."""
    yield
    package_logger = logging.getLogger("filekeeper")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def now() -> datetime:
    """Current time, used as the reference for file ages."""
    return datetime.now(UTC)


@pytest.fixture
def aged_file(now: datetime) -> AgedFileFactory:
    """Factory creating a file whose mtime lies ``age`` in the past."""

    def _make(path: Path, age: timedelta = timedelta(0), content: str = "content") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        timestamp = (now - age).timestamp()
        os.utime(path, (timestamp, timestamp))
        return path

    return _make


@pytest.fixture
def runtime_context(tmp_path: Path) -> RuntimeContext:
    """RuntimeContext pointing every location into tmp_path."""
    return RuntimeContext(
        is_root=False,
        config_path=tmp_path / "config" / "filekeeper.yaml",
        log_path=tmp_path / "logs" / "filekeeper.log",
        systemd_dir=tmp_path / "config" / "systemd" / "user",
    )
