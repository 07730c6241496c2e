"""Functional core - pure business logic with no I/O."""

from .record import Record, SCORE_MAX, SCORE_MIN
from .report import (
    ReportBucket,
    ReportType,
    daily_scores,
    generate_report,
    matches_tags,
)

__all__ = [
    # Records
    "Record",
    "SCORE_MIN",
    "SCORE_MAX",
    # Reports
    "ReportBucket",
    "ReportType",
    "daily_scores",
    "generate_report",
    "matches_tags",
]
