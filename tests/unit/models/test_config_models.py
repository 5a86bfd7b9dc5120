"""Unit tests for configuration models."""

import pytest
from filekeeper.models.config import (
    Config,
    DirectoryPolicy,
    GeneralConfig,
    LoggingConfig,
    SecureDeleteConfig,
    SecurityPolicy,
)
from pydantic import ValidationError


class TestDefaults:
    """Omitted keys take the example configuration values."""

    def test_general(self) -> None:
        general = GeneralConfig()
        assert general.enabled is True
        assert general.logging == LoggingConfig(enabled=True, level="info", file=None)

    def test_security(self) -> None:
        security = SecurityPolicy()
        assert security.dry_run is False
        assert security.secure_delete == SecureDeleteConfig(
            enabled=False, passes=3, obfuscate_filenames=False
        )

    def test_directory_policy(self) -> None:
        policy = DirectoryPolicy(path="/data", retention_period="30d")
        assert policy.file_pattern == ""
        assert policy.exclude_subdirs is False
        assert policy.remove_empty_dirs is False

    def test_config(self) -> None:
        config = Config()
        assert config.directories == []
        assert config.general.enabled is True


class TestLoggingConfig:
    """Tests for LoggingConfig validation."""

    @pytest.mark.parametrize(("raw", "expected"), [("INFO", "info"), (" Warn ", "warn")])
    def test_level_case_insensitive(self, raw: str, expected: str) -> None:
        """Levels are normalised to lower case."""
        assert LoggingConfig(level=raw).level == expected  # type: ignore[arg-type]

    def test_unknown_level(self) -> None:
        """Unknown levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="trace")  # type: ignore[arg-type]


class TestValidation:
    """Tests for required fields and bounds."""

    def test_policy_requires_path(self) -> None:
        with pytest.raises(ValidationError, match="path"):
            DirectoryPolicy.model_validate({"retention_period": "1d"})

    def test_policy_requires_retention(self) -> None:
        with pytest.raises(ValidationError, match="retention_period"):
            DirectoryPolicy.model_validate({"path": "/data"})

    def test_negative_passes(self) -> None:
        """Pass counts cannot be negative."""
        with pytest.raises(ValidationError):
            SecureDeleteConfig(passes=-1)

    def test_zero_passes_allowed(self) -> None:
        """Zero passes means plain unlink."""
        assert SecureDeleteConfig(enabled=True, passes=0).passes == 0

    def test_models_are_frozen(self) -> None:
        """Loaded configuration cannot be mutated."""
        security = SecurityPolicy()
        with pytest.raises(ValidationError):
            security.dry_run = True  # type: ignore[misc]

    def test_dry_run_override_copy(self) -> None:
        """model_copy produces an overridden copy without touching the original."""
        security = SecurityPolicy()
        forced = security.model_copy(update={"dry_run": True})
        assert forced.dry_run is True
        assert security.dry_run is False
        assert forced.secure_delete == security.secure_delete


class TestFromDict:
    """Tests for building a Config from parsed YAML."""

    def test_nested_sections(self) -> None:
        config = Config.model_validate(
            {
                "general": {"enabled": False, "logging": {"level": "debug"}},
                "directories": [
                    {"path": "/a", "retention_period": "1d", "exclude_subdirs": True},
                ],
                "security": {"secure_delete": {"enabled": True}},
            }
        )

        assert config.general.enabled is False
        assert config.general.logging.level == "debug"
        assert config.general.logging.enabled is True
        assert config.directories[0].exclude_subdirs is True
        assert config.security.secure_delete.enabled is True
        assert config.security.secure_delete.passes == 3
