"""Tests for configuration loading."""

import logging

import pytest

from howdy.config import DEFAULT_JOURNAL_FILE, DEFAULT_REPORT, Config, load_config


@pytest.fixture(autouse=True)
def no_env_override(monkeypatch):
    monkeypatch.delenv("HOWDY_JOURNAL", raising=False)


@pytest.fixture
def conf_file(tmp_path):
    return tmp_path / "howdy.conf"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.conf") == Config()

    def test_defaults(self):
        config = Config()
        assert config.journal_file == DEFAULT_JOURNAL_FILE == "howdy.journal"
        assert config.default_report == DEFAULT_REPORT == "monthly"
        assert config.report_history is None

    def test_reads_keys(self, conf_file):
        conf_file.write_text(
            "# howdy settings\n"
            "\n"
            'JOURNAL_FILE = "~/notes/mood log.journal"  # quoted\n'
            "default_report = w\n"
            "REPORT_HISTORY = 12   # newest only\n"
        )
        config = load_config(conf_file)

        assert config.journal_file == "~/notes/mood log.journal"
        assert config.default_report == "w"
        assert config.report_history == 12

    def test_ignores_unknown_keys_and_junk(self, conf_file):
        conf_file.write_text("TELEMETRY = on\nnot a setting\nDEFAULT_REPORT='lm'\n")
        config = load_config(conf_file)
        assert config.default_report == "lm"
        assert config.journal_file == DEFAULT_JOURNAL_FILE

    def test_bad_history_is_logged_and_ignored(self, conf_file, caplog):
        conf_file.write_text("REPORT_HISTORY = lots\n")
        with caplog.at_level(logging.WARNING, logger="howdy.config"):
            config = load_config(conf_file)

        assert config.report_history is None
        assert "REPORT_HISTORY" in caplog.text

    def test_empty_values_fall_back_to_defaults(self, conf_file):
        conf_file.write_text("JOURNAL_FILE =\nDEFAULT_REPORT =\nREPORT_HISTORY =\n")
        assert load_config(conf_file) == Config()

    def test_env_overrides_journal_file(self, conf_file, monkeypatch):
        conf_file.write_text("JOURNAL_FILE = from-config.journal\n")
        monkeypatch.setenv("HOWDY_JOURNAL", "/tmp/from-env.journal")
        assert load_config(conf_file).journal_file == "/tmp/from-env.journal"
