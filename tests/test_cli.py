"""
Tests for the Typer command-line interface.
"""

import pytest
from typer.testing import CliRunner

from timefilters.cli.app import EXIT_ERROR, EXIT_OUTSIDE, EXIT_WITHIN, app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "timezone: Europe/Berlin\n"
        "schedules:\n"
        "  office-hours:\n"
        "    - Mon 09:00-17:00\n"
        "  weekend:\n"
        "    - Sat\n"
        "    - Sun\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a stray ./config.yaml from leaking into the tests."""
    monkeypatch.chdir(tmp_path)


class TestParseCommand:

    def test_valid_expressions(self):
        result = runner.invoke(app, ["parse", "Sun", "9:00-17:00"])

        assert result.exit_code == 0
        assert "Sunday" in result.stdout

    def test_invalid_expression_exits_with_error(self):
        result = runner.invoke(app, ["parse", "Sunday", "17:00-09:00"])

        assert result.exit_code == 1
        assert "invalid" in result.stdout


class TestCheckCommand:

    def test_within_range(self):
        result = runner.invoke(app, ["check", "-r", "Sun 01:02:03-13:14:15", "--at", "2024-11-24 01:02:03"])

        assert result.exit_code == EXIT_WITHIN
        assert "within" in result.stdout

    def test_outside_range_at_exclusive_end(self):
        result = runner.invoke(app, ["check", "-r", "Sun 01:02:03-13:14:15", "--at", "2024-11-24 13:14:15"])

        assert result.exit_code == EXIT_OUTSIDE
        assert "outside" in result.stdout

    def test_multiple_ranges_are_or_combined(self):
        result = runner.invoke(
            app,
            ["check", "-r", "Monday", "-r", "Sunday", "--at", "2024-11-24 20:00"],
        )

        assert result.exit_code == EXIT_WITHIN

    def test_invalid_range_is_an_error(self):
        result = runner.invoke(app, ["check", "-r", "Caturday", "--at", "2024-11-24 20:00"])

        assert result.exit_code == EXIT_ERROR
        assert "Caturday" in result.stdout

    def test_requires_range_or_schedule(self):
        result = runner.invoke(app, ["check", "--at", "2024-11-24 20:00"])

        assert result.exit_code == EXIT_ERROR

    def test_invalid_instant_is_an_error(self):
        result = runner.invoke(app, ["check", "-r", "Sunday", "--at", "not a date"])

        assert result.exit_code == EXIT_ERROR

    def test_schedule_from_config(self, config_file):
        result = runner.invoke(
            app,
            ["check", "--schedule", "office-hours", "--at", "2024-11-25 10:30", "--config", str(config_file)],
        )

        assert result.exit_code == EXIT_WITHIN

    def test_unknown_schedule(self, config_file):
        result = runner.invoke(
            app,
            ["check", "--schedule", "holidays", "--at", "2024-11-25 10:30", "--config", str(config_file)],
        )

        assert result.exit_code == EXIT_ERROR
        assert "Unknown schedule" in result.stdout

    def test_missing_explicit_config(self, tmp_path):
        result = runner.invoke(
            app,
            ["check", "-r", "Sunday", "--config", str(tmp_path / "missing.yaml")],
        )

        assert result.exit_code == EXIT_ERROR


class TestFilterCommand:

    def test_prints_matching_instants(self):
        result = runner.invoke(
            app,
            ["filter", "2024-11-24 10:00", "2024-11-25 10:00", "-r", "Sunday"],
        )

        assert result.exit_code == 0
        assert "2024-11-24T10:00:00" in result.stdout
        assert "2024-11-25" not in result.stdout

    def test_no_matches_exits_with_one(self):
        result = runner.invoke(app, ["filter", "2024-11-25 10:00", "-r", "Sunday"])

        assert result.exit_code == EXIT_OUTSIDE


class TestSchedulesCommand:

    def test_lists_schedules(self, config_file):
        result = runner.invoke(
            app,
            ["schedules", "--at", "2024-11-23 10:00", "--config", str(config_file)],
        )

        assert result.exit_code == 0
        assert "office-hours" in result.stdout
        assert "weekend" in result.stdout

    def test_no_config_file(self):
        result = runner.invoke(app, ["schedules"])

        assert result.exit_code == 0
        assert "No schedules" in result.stdout
