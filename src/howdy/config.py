"""Configuration management for Howdy."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

HOWDY_HOME = Path(os.environ.get("HOWDY_HOME", Path.home() / ".howdy"))
CONFIG_FILE = HOWDY_HOME / "howdy.conf"

# Relative on purpose: resolved against the current working directory
DEFAULT_JOURNAL_FILE = "howdy.journal"
DEFAULT_REPORT = "monthly"


@dataclass
class Config:
    """Howdy configuration."""

    journal_file: str = DEFAULT_JOURNAL_FILE
    default_report: str = DEFAULT_REPORT
    # Newest N buckets for open-ended reports; None shows the whole history
    report_history: int | None = None


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from howdy.conf, then apply environment overrides."""
    config = Config()
    path = path or CONFIG_FILE

    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "journal_file":
                    config.journal_file = value or DEFAULT_JOURNAL_FILE
                case "default_report":
                    config.default_report = value or DEFAULT_REPORT
                case "report_history":
                    if not value:
                        config.report_history = None
                        continue
                    try:
                        config.report_history = int(value)
                    except ValueError:
                        logger.warning(f"Ignoring non-integer REPORT_HISTORY: {value!r}")
                case _:
                    logger.debug(f"Ignoring unknown config key: {key}")

    env_journal = os.environ.get("HOWDY_JOURNAL")
    if env_journal:
        config.journal_file = env_journal

    return config
