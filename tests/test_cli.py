"""Tests for the click command surface."""

import json
from datetime import date, timedelta
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from howdy.cli import EXIT_CORRUPT, EXIT_REPORT_TYPE, EXIT_UNREADABLE, EXIT_VALIDATION, main
from howdy.config import Config


@pytest.fixture(autouse=True)
def default_config():
    with patch("howdy.cli.load_config", return_value=Config()):
        yield


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def journal_path(tmp_path):
    return tmp_path / "howdy.journal"


def run(runner, journal_path, *args):
    return runner.invoke(main, ["-f", str(journal_path), *args])


class TestAdd:
    def test_appends_record(self, runner, journal_path):
        result = run(runner, journal_path, "add", "3", "-t", "sports", "went", "for", "a", "run")

        assert result.exit_code == 0, result.output
        today = date.today().isoformat()
        assert journal_path.read_text() == f"{today} | 3 | sports | went for a run\n"
        assert "+3" in result.output

    def test_negative_score(self, runner, journal_path):
        result = run(runner, journal_path, "add", "-1", "meh")

        assert result.exit_code == 0, result.output
        assert "| -1 |  | meh" in journal_path.read_text()

    def test_out_of_range_score(self, runner, journal_path):
        result = run(runner, journal_path, "add", "128")

        assert result.exit_code == EXIT_VALIDATION
        assert "out of range" in result.output
        assert not journal_path.exists()

    def test_bad_tag(self, runner, journal_path):
        result = run(runner, journal_path, "add", "1", "-t", "a|b")
        assert result.exit_code == EXIT_VALIDATION

    def test_dash_comment_after_separator(self, runner, journal_path):
        result = run(runner, journal_path, "add", "-1", "-t", "work", "--", "-tired", "again")

        assert result.exit_code == 0, result.output
        assert journal_path.read_text().endswith("| -1 | work | -tired again\n")

    def test_help_mentions_separator(self, runner, journal_path):
        result = run(runner, journal_path, "add", "--help")
        assert "--" in result.output
        assert "-tired" in result.output

    def test_non_numeric_score_is_usage_error(self, runner, journal_path):
        result = run(runner, journal_path, "add", "great")
        assert result.exit_code == 2
        assert not journal_path.exists()


class TestMood:
    @pytest.fixture
    def journal(self, journal_path):
        today = date.today()
        lines = [
            f"{(today - timedelta(days=40)).isoformat()} | 4 |  | old",
            f"{today.isoformat()} | 2 | sports | run",
            f"{today.isoformat()} | 1 |  | foo",
        ]
        journal_path.write_text("\n".join(lines) + "\n")
        return journal_path

    def test_last_month(self, runner, journal):
        result = run(runner, journal, "mood", "lm")

        assert result.exit_code == 0, result.output
        assert result.output.startswith("30-day mood:\n")
        assert result.output.rstrip().endswith("+3")

    def test_tag_filter_and_type(self, runner, journal):
        result = run(runner, journal, "mood", "sports", "lm")

        assert result.exit_code == 0, result.output
        assert result.output.rstrip().endswith("+2")

    def test_default_is_monthly(self, runner, journal):
        result = run(runner, journal, "mood")

        assert result.exit_code == 0, result.output
        assert result.output.startswith("monthly moods:")

    def test_json(self, runner, journal):
        result = run(runner, journal, "mood", "--json", "y")

        data = json.loads(result.output)
        assert data["report"] == "yearly"
        assert data["tags"] == []
        assert [b["score"] for b in data["buckets"]] == [7]

    def test_moving_has_thirty_lines(self, runner, journal):
        result = run(runner, journal, "mood", "mm")

        assert result.exit_code == 0, result.output
        assert len(result.output.strip().splitlines()) == 1 + 30

    def test_unknown_tokens_are_tags(self, runner, journal):
        result = run(runner, journal, "mood", "--json", "work")

        data = json.loads(result.output)
        assert data["report"] == "monthly"
        assert data["tags"] == ["work"]
        assert all(b["score"] == 0 for b in data["buckets"])

    def test_missing_journal(self, runner, journal_path):
        result = run(runner, journal_path, "mood")

        assert result.exit_code == EXIT_UNREADABLE
        assert "not found" in result.output

    def test_corrupt_journal(self, runner, journal_path):
        journal_path.write_text("2024-01-01 | 1 |  | ok\n2024-01-02 | x |  | bad\n")
        result = run(runner, journal_path, "mood")

        assert result.exit_code == EXIT_CORRUPT
        assert "line 2" in result.output

    def test_invalid_default_report(self, runner, journal):
        with patch("howdy.cli.load_config", return_value=Config(default_report="daily")):
            result = run(runner, journal, "mood")

        assert result.exit_code == EXIT_REPORT_TYPE
        assert "daily" in result.output

    def test_empty_journal(self, runner, journal_path):
        journal_path.write_text("")
        result = run(runner, journal_path, "mood", "w")

        assert result.exit_code == 0
        assert "No entries yet." in result.output
