"""Shared workflow layer between the CLI and the core.

Resolves the journal from config, records entries, and builds reports.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from .adapters.file_journal import FileJournalStore
from .config import Config
from .core.record import Record
from .core.report import ReportBucket, ReportType, generate_report
from .ports.journal_store import JournalStore

logger = logging.getLogger(__name__)


def get_journal(config: Config, file_path: Path | str | None = None) -> FileJournalStore:
    """Resolve the journal file: explicit path first, then config."""
    return FileJournalStore(Path(file_path or config.journal_file))


def add_entry(
    config: Config,
    score: int,
    tags: Iterable[str] = (),
    comment: str = "",
    file_path: Path | str | None = None,
    today: date | None = None,
) -> Record:
    """Append today's record to the journal and return it."""
    journal: JournalStore = get_journal(config, file_path)
    record = journal.append(today or date.today(), score, tags, comment)
    logger.debug(f"Appended {record.to_line()!r} to {file_path or config.journal_file}")
    return record


def split_mood_args(args: Iterable[str], default_report: str) -> tuple[list[str], str]:
    """
    Split `mood` positionals into (tags, report type token).

    The last argument is the report type if it is a known token;
    everything else is a tag.
    """
    args = list(args)
    if args and args[-1] in ReportType.tokens():
        return args[:-1], args[-1]
    return args, default_report


def build_report(
    config: Config,
    report_type: ReportType | str | None = None,
    tags: Iterable[str] = (),
    file_path: Path | str | None = None,
    today: date | None = None,
) -> tuple[ReportType, list[ReportBucket]]:
    """Read the journal and aggregate it into report buckets."""
    # Resolve the type before touching the file so a bad token fails fast
    resolved = ReportType.parse(report_type or config.default_report)
    journal: JournalStore = get_journal(config, file_path)
    records = journal.read_all()
    logger.debug(f"Read {len(records)} records from {file_path or config.journal_file}")
    buckets = generate_report(
        records,
        resolved,
        tags=tags,
        today=today,
        history=config.report_history,
    )
    return resolved, buckets
