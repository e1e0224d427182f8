"""Unit tests for the CLI: command registration and behavior over a temp store."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from commitledger.cli.app import app
from commitledger.core.build_store import BuildStore
from commitledger.models.ledger import RecordingKind

runner = CliRunner()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "builds.db"


@pytest.fixture
def populated_store(store_path: Path, make_entry) -> Path:
    """main#1 <- main#2 and main#1 <- feature#1, sharing commit c1."""
    store = BuildStore(store_path)
    store.add_build("main#1", job="main")
    store.add_build("main#2", "main#1", job="main")
    store.add_build("feature#1", "main#1", job="feature")
    store.add_build("other#1", job="other")
    store.attach(make_entry("main#1", ["c1"], kind=RecordingKind.START))
    store.attach(make_entry("main#2", ["m2"]))
    store.attach(make_entry("feature#1", ["f1"]))
    store.attach(make_entry("other#1", ["o1"], kind=RecordingKind.START))
    return store_path


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # Typer's no_args_is_help may exit with 0 or 2 depending on version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("add-build", "record", "show", "resolve"):
            assert command in result.output

    @pytest.mark.parametrize("command", ["add-build", "record", "show", "resolve"])
    def test_command_exists(self, command):
        result = runner.invoke(app, [command, "--help"])
        assert result.exit_code == 0

    def test_log_level_option_is_case_insensitive(self, populated_store: Path):
        result = runner.invoke(
            app, ["--log-level", "debug", "show", "main#1", "-s", str(populated_store)]
        )
        assert result.exit_code == 0

    def test_unknown_log_level_is_a_usage_error(self, populated_store: Path):
        result = runner.invoke(
            app, ["--log-level", "LOUD", "show", "main#1", "-s", str(populated_store)]
        )
        assert result.exit_code == 2
        assert not isinstance(result.exception, ValueError)


# ---------------------------------------------------------------------------
# Test: commands
# ---------------------------------------------------------------------------


class TestAddBuild:
    def test_registers_builds(self, store_path: Path):
        result = runner.invoke(app, ["add-build", "main#1", "--store", str(store_path)])
        assert result.exit_code == 0
        result = runner.invoke(
            app, ["add-build", "main#2", "-p", "main#1", "-j", "main", "-s", str(store_path)]
        )
        assert result.exit_code == 0
        assert BuildStore(store_path).predecessor("main#2") == "main#1"

    def test_rejects_duplicate(self, store_path: Path):
        runner.invoke(app, ["add-build", "main#1", "-s", str(store_path)])
        result = runner.invoke(app, ["add-build", "main#1", "-s", str(store_path)])
        assert result.exit_code == 1
        assert "already registered" in result.output

    def test_rejects_unknown_previous(self, store_path: Path):
        result = runner.invoke(app, ["add-build", "main#2", "-p", "main#1", "-s", str(store_path)])
        assert result.exit_code == 1
        assert "Build not found" in result.output

    def test_job_defaults_previous_to_latest_build(self, store_path: Path):
        runner.invoke(app, ["add-build", "main#1", "-j", "main", "-s", str(store_path)])
        runner.invoke(app, ["add-build", "feature#1", "-j", "feature", "-s", str(store_path)])
        result = runner.invoke(app, ["add-build", "main#2", "-j", "main", "-s", str(store_path)])
        assert result.exit_code == 0
        assert "after main#1" in result.output
        store = BuildStore(store_path)
        assert store.predecessor("main#2") == "main#1"
        assert store.predecessor("feature#1") is None


class TestShow:
    def test_missing_store(self, store_path: Path):
        result = runner.invoke(app, ["show", "main#1", "-s", str(store_path)])
        assert result.exit_code == 1
        assert "Build store not found" in result.output

    def test_unknown_build(self, populated_store: Path):
        result = runner.invoke(app, ["show", "nope", "-s", str(populated_store)])
        assert result.exit_code == 1

    def test_shows_entries(self, populated_store: Path):
        result = runner.invoke(app, ["show", "main#1", "-v", "-s", str(populated_store)])
        assert result.exit_code == 0
        assert "start" in result.output
        assert "c1" in result.output


class TestRecord:
    def test_unreadable_repository_records_nothing(self, populated_store: Path, tmp_path: Path):
        not_a_repo = tmp_path / "plain"
        not_a_repo.mkdir()
        result = runner.invoke(
            app,
            ["record", "other#1", "--repo", "fresh", "--path", str(not_a_repo),
             "-s", str(populated_store)],
        )
        assert result.exit_code == 1
        assert "Nothing recorded" in result.output

    def test_already_recorded(self, populated_store: Path, repo_key: str, tmp_path: Path):
        result = runner.invoke(
            app,
            ["record", "main#1", "--repo", repo_key, "--path", str(tmp_path),
             "-s", str(populated_store)],
        )
        assert result.exit_code == 1
        assert "Already recorded" in result.output


class TestResolve:
    def test_finds_reference_build(self, populated_store: Path):
        result = runner.invoke(app, ["resolve", "feature#1", "main#2", "-s", str(populated_store)])
        assert result.exit_code == 0
        assert "main#1" in result.output

    def test_quiet(self, populated_store: Path):
        result = runner.invoke(
            app, ["resolve", "feature#1", "main#2", "-q", "-s", str(populated_store)]
        )
        assert result.exit_code == 0
        assert result.output.strip().splitlines()[-1] == "main#1"

    def test_not_found(self, populated_store: Path):
        result = runner.invoke(app, ["resolve", "other#1", "main#2", "-s", str(populated_store)])
        assert result.exit_code == 1
        assert "No reference build found" in result.output

    def test_latest_if_not_found(self, populated_store: Path):
        result = runner.invoke(
            app,
            ["resolve", "other#1", "main#2", "--latest-if-not-found", "-q",
             "-s", str(populated_store)],
        )
        assert result.exit_code == 0
        assert result.output.strip().splitlines()[-1] == "main#2"

    def test_budget(self, populated_store: Path):
        result = runner.invoke(
            app, ["resolve", "feature#1", "main#2", "-m", "0", "-s", str(populated_store)]
        )
        assert result.exit_code == 1

    def test_unknown_reference_build(self, populated_store: Path):
        result = runner.invoke(app, ["resolve", "feature#1", "nope", "-s", str(populated_store)])
        assert result.exit_code == 1
        assert "Build not found" in result.output
