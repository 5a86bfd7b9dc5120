"""Unit tests for the run command."""

from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

from filekeeper.cli.main import app
from filekeeper.core.paths import RuntimeContext
from typer.testing import CliRunner

runner = CliRunner()

OLD = timedelta(days=10)
RECENT = timedelta(days=1)

AgedFile = Callable[..., Path]
ConfigWriter = Callable[..., Path]


def _dirs(*roots: Path, **kwargs: object) -> list[dict[str, object]]:
    return [{"path": str(root), "retention_period": "7d", **kwargs} for root in roots]


class TestRunCommand:
    """Tests for filekeeper run."""

    def test_run_help(self) -> None:
        """Run command shows help."""
        result = runner.invoke(app, ["run", "--help"])
        assert result.exit_code == 0
        assert "--dry-run" in result.output

    def test_deletes_expired_files(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """Expired files are removed and the run is logged."""
        old = aged_file(tmp_path / "data" / "old.log", OLD)
        recent = aged_file(tmp_path / "data" / "recent.log", RECENT)
        write_config(_dirs(tmp_path / "data"))

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert not old.exists()
        assert recent.exists()
        assert "Removed 1 expired entry(ies)." in result.output
        log = cli_context.log_path.read_text()
        assert f"Deleted file: {old}" in log
        assert "Finished processing all directories" in log

    def test_dry_run_flag(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """--dry-run reports candidates on stdout and deletes nothing."""
        old = aged_file(tmp_path / "data" / "old.log", OLD)
        write_config(_dirs(tmp_path / "data"))

        result = runner.invoke(app, ["run", "--dry-run"])

        assert result.exit_code == 0
        assert old.exists()
        assert "dry-run mode" in result.output
        assert f"Would delete file: {old} (modified: " in result.output
        assert "1 would be deleted" in result.output

    def test_dry_run_from_config(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """security.dry_run in the file has the same effect."""
        old = aged_file(tmp_path / "data" / "old.log", OLD)
        empty = tmp_path / "data" / "empty"
        empty.mkdir()
        write_config(
            _dirs(tmp_path / "data", remove_empty_dirs=True), security={"dry_run": True}
        )

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert old.exists()
        assert empty.is_dir()
        assert f"Would remove empty directory: {empty}" in result.output

    def test_custom_config_path(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """--config selects another file."""
        old = aged_file(tmp_path / "data" / "old.log", OLD)
        custom = write_config(_dirs(tmp_path / "data"), path=tmp_path / "custom.yaml")

        result = runner.invoke(app, ["run", "--config", str(custom)])

        assert result.exit_code == 0
        assert not old.exists()
        assert not cli_context.config_path.exists()

    def test_disabled_program(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """A disabled configuration does nothing without --force."""
        old = aged_file(tmp_path / "data" / "old.log", OLD)
        write_config(_dirs(tmp_path / "data"), general={"enabled": False})

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert old.exists()
        assert "Program is disabled in configuration" in result.output

    def test_force_overrides_disabled(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """--force runs a disabled configuration."""
        old = aged_file(tmp_path / "data" / "old.log", OLD)
        write_config(
            _dirs(tmp_path / "data"),
            general={"enabled": False, "logging": {"enabled": False}},
        )

        result = runner.invoke(app, ["run", "--force"])

        assert result.exit_code == 0
        assert not old.exists()
        assert not cli_context.log_path.exists()

    def test_missing_config(self, cli_context: RuntimeContext) -> None:
        """A missing configuration exits with code 1."""
        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "Configuration not found" in result.output
        assert "filekeeper init" in result.output

    def test_invalid_config(self, cli_context: RuntimeContext) -> None:
        """An unparseable configuration exits with code 1."""
        cli_context.config_path.parent.mkdir(parents=True)
        cli_context.config_path.write_text("directories: [unclosed\n")

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "Error loading configuration" in result.output

    def test_failed_policy_does_not_stop_run(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """A broken policy is reported and the next one still runs."""
        old = aged_file(tmp_path / "data" / "old.log", OLD)
        write_config(_dirs(tmp_path / "missing", tmp_path / "data"))

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert not old.exists()
        assert "Error processing directory" in result.output
        assert "1 directory policy(ies) could not be processed" in result.output
        assert "Error processing directory" in cli_context.log_path.read_text()

    def test_invalid_retention_policy(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
    ) -> None:
        """An invalid retention period fails the run."""
        (tmp_path / "data").mkdir()
        write_config([{"path": str(tmp_path / "data"), "retention_period": "1w"}])

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "invalid retention period" in cli_context.log_path.read_text()

    def test_out_of_range_retention_does_not_stop_run(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """Huge retention periods fail their own policy only."""
        (tmp_path / "huge").mkdir()
        (tmp_path / "ancient").mkdir()
        old = aged_file(tmp_path / "data" / "old.log", OLD)
        write_config(
            [
                {"path": str(tmp_path / "huge"), "retention_period": "1000000000d"},
                {"path": str(tmp_path / "ancient"), "retention_period": "3000000d"},
                *_dirs(tmp_path / "data"),
            ]
        )

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert not old.exists()
        assert "2 directory policy(ies) could not be processed" in result.output

    def test_logging_setup_failure(
        self, tmp_path: Path, cli_context: RuntimeContext, write_config: ConfigWriter
    ) -> None:
        """An unusable log file aborts before any sweep."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        write_config([], general={"logging": {"file": str(blocker / "keep.log")}})

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 1
        assert "Error setting up logger" in result.output

    def test_no_directories(self, cli_context: RuntimeContext, write_config: ConfigWriter) -> None:
        """An empty directory list only warns."""
        write_config([])

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert "No directories configured" in result.output

    def test_table_shown_unless_quiet(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
        aged_file: AgedFile,
    ) -> None:
        """The results table is hidden by --quiet."""
        write_config(_dirs(tmp_path / "data"))

        aged_file(tmp_path / "data" / "a.log", OLD)
        shown = runner.invoke(app, ["run"])
        aged_file(tmp_path / "data" / "b.log", OLD)
        hidden = runner.invoke(app, ["--quiet", "run"])

        assert shown.exit_code == 0
        assert hidden.exit_code == 0
        assert "Status" in shown.output
        assert "Status" not in hidden.output

    def test_verbose_mirrors_log(
        self,
        tmp_path: Path,
        cli_context: RuntimeContext,
        write_config: ConfigWriter,
    ) -> None:
        """--verbose prints log records to the terminal."""
        (tmp_path / "data").mkdir()
        write_config(_dirs(tmp_path / "data"))

        result = runner.invoke(app, ["--verbose", "run"])

        assert result.exit_code == 0
        assert "Processing directory" in result.output
