"""Tests for EventEase CLI."""

import pytest
from typer.testing import CliRunner

from eventease.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at an isolated store with no latency."""
    monkeypatch.setenv("EVENTEASE_STORAGE_DIR", str(tmp_path / "store"))
    monkeypatch.setenv("EVENTEASE_LATENCY_MIN", "0")
    monkeypatch.setenv("EVENTEASE_LATENCY_MAX", "0")
    monkeypatch.setenv("COLUMNS", "200")
    return tmp_path / "store"


class TestCLIHelp:
    """Tests for CLI help and info commands."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "EventEase" in result.stdout

    def test_version_command(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "EventEase v" in result.stdout

    def test_info_command(self, cli_env):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "EventEase Configuration" in result.stdout
        assert "EVENTEASE_STORAGE_DIR" in result.stdout

    def test_invalid_latency_config(self, monkeypatch):
        monkeypatch.setenv("EVENTEASE_LATENCY_MIN", "2")
        result = runner.invoke(app, ["events"])
        assert result.exit_code == 1
        assert "must not exceed" in result.stdout


class TestEventCommands:
    """Tests for listing and showing events."""

    def test_events_lists_fixtures(self):
        result = runner.invoke(app, ["events"])
        assert result.exit_code == 0
        assert "evt_1" in result.stdout
        assert "evt_2" in result.stdout

    def test_events_status_filter(self):
        result = runner.invoke(app, ["events", "--status", "draft"])
        assert result.exit_code == 0
        assert "evt_2" in result.stdout
        assert "evt_1" not in result.stdout

    def test_events_search(self):
        result = runner.invoke(app, ["events", "--search", "summit"])
        assert result.exit_code == 0
        assert "evt_1" in result.stdout
        assert "evt_2" not in result.stdout

    def test_events_bad_sort(self):
        result = runner.invoke(app, ["events", "--sort", "popularity"])
        assert result.exit_code == 1
        assert "Unknown sort key" in result.stdout

    def test_show(self):
        result = runner.invoke(app, ["show", "evt_1"])
        assert result.exit_code == 0
        assert "Tech Innovation Summit 2024" in result.stdout

    def test_show_unknown(self):
        result = runner.invoke(app, ["show", "evt_missing"])
        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestCreateCommand:
    """Tests for the create command."""

    def test_create_draft(self):
        result = runner.invoke(
            app,
            ["create", "--title", "AI Workshop", "--date", "2025-01-25", "--category", "technology"],
        )
        assert result.exit_code == 0
        assert "Event saved:" in result.stdout

        listed = runner.invoke(app, ["events", "--status", "draft"])
        assert "AI Workshop" in listed.stdout

    def test_create_and_publish_with_tickets(self):
        result = runner.invoke(
            app,
            [
                "create",
                "--title", "AI Workshop",
                "--date", "2025-01-25",
                "--category", "technology",
                "--ticket", "Early Bird:10:50",
                "--ticket", "Regular:20:100",
                "--publish",
            ],
        )
        assert result.exit_code == 0
        assert "Event published:" in result.stdout

    def test_create_bad_date(self):
        result = runner.invoke(
            app,
            ["create", "--title", "AI Workshop", "--date", "someday", "--category", "technology"],
        )
        assert result.exit_code == 1
        assert "Invalid design details" in result.stdout

    def test_create_bad_ticket(self):
        result = runner.invoke(
            app,
            [
                "create",
                "--title", "AI Workshop",
                "--date", "2025-01-25",
                "--category", "technology",
                "--ticket", "Regular",
            ],
        )
        assert result.exit_code == 1
        assert "NAME:PRICE:QUANTITY" in result.stdout


class TestRecordCommands:
    """Tests for commands that act on existing records."""

    def test_publish(self):
        result = runner.invoke(app, ["publish", "evt_2"])
        assert result.exit_code == 0
        assert "Published:" in result.stdout

    def test_cancel(self):
        result = runner.invoke(app, ["cancel", "evt_1"])
        assert result.exit_code == 0
        assert "Cancelled:" in result.stdout

    def test_delete(self):
        result = runner.invoke(app, ["delete", "evt_2", "--yes"])
        assert result.exit_code == 0

        listed = runner.invoke(app, ["events"])
        assert "evt_2" not in listed.stdout

    def test_delete_aborted(self):
        result = runner.invoke(app, ["delete", "evt_2"], input="n\n")
        assert result.exit_code == 1

    def test_tickets(self):
        result = runner.invoke(app, ["tickets", "evt_1"])
        assert result.exit_code == 0
        assert "Early Bird" in result.stdout
        assert "85/100" in result.stdout

    def test_attendees(self):
        result = runner.invoke(app, ["attendees", "evt_1"])
        assert result.exit_code == 0
        assert "attendee_1" in result.stdout

    def test_check_in(self):
        result = runner.invoke(app, ["check-in", "attendee_1"])
        assert result.exit_code == 0
        assert "checked-in" in result.stdout

    def test_analytics_json(self):
        result = runner.invoke(app, ["analytics", "evt_1", "--json"])
        assert result.exit_code == 0
        assert '"views": 2450' in result.stdout
        assert '"conversion_rate"' in result.stdout

    def test_stats(self):
        result = runner.invoke(app, ["stats", "--organizer", "organizer_user_1"])
        assert result.exit_code == 0
        assert "total_events" in result.stdout

    def test_reset(self):
        runner.invoke(app, ["delete", "evt_2", "--yes"])

        result = runner.invoke(app, ["reset", "--yes"])
        assert result.exit_code == 0

        listed = runner.invoke(app, ["events"])
        assert "evt_2" in listed.stdout
