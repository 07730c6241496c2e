"""Pure report aggregation logic - no I/O dependencies.

Records are rolled up into one score per calendar day, then the daily
scores are summed over time buckets. All bucketing works on plain
``date`` values anchored on ``today``; there is no time-of-day or
timezone state.
"""

import calendar
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from itertools import accumulate
from typing import Iterable

from howdy.core.record import Record
from howdy.errors import InvalidReportType, ValidationError

WEEK_START = calendar.MONDAY
WEEK_DAYS = 7
MONTH_WINDOW_DAYS = 30
YEAR_WINDOW_DAYS = 365
MOVING_WINDOWS = 30


class ReportType(Enum):
    """Report type, keyed by its long token."""

    WEEKLY = "weekly"
    SEVEN_DAYS = "7-day"
    MONTHLY = "monthly"
    THIRTY_DAYS = "30-day"
    LAST_MONTH = "last-month"
    YEARLY = "yearly"
    MOVING = "moving"

    @property
    def short_token(self) -> str:
        return _SHORT_TOKENS[self]

    @property
    def caption(self) -> str:
        """Human-readable caption for report output."""
        return _CAPTIONS[self]

    @property
    def is_fixed(self) -> bool:
        """Fixed types always yield the same number of buckets."""
        return self in (ReportType.LAST_MONTH, ReportType.YEARLY, ReportType.MOVING)

    @classmethod
    def tokens(cls) -> list[str]:
        """All accepted tokens, short form first."""
        result = []
        for report_type in cls:
            result.extend([report_type.short_token, report_type.value])
        return result

    @classmethod
    def parse(cls, token: "str | ReportType") -> "ReportType":
        """Look up a report type by short or long token."""
        if isinstance(token, cls):
            return token
        for report_type in cls:
            if token in (report_type.value, report_type.short_token):
                return report_type
        raise InvalidReportType(str(token), cls.tokens())


_SHORT_TOKENS = {
    ReportType.WEEKLY: "w",
    ReportType.SEVEN_DAYS: "7d",
    ReportType.MONTHLY: "m",
    ReportType.THIRTY_DAYS: "30d",
    ReportType.LAST_MONTH: "lm",
    ReportType.YEARLY: "y",
    ReportType.MOVING: "mm",
}

_CAPTIONS = {
    ReportType.WEEKLY: "weekly moods:",
    ReportType.SEVEN_DAYS: "7-day interval moods:",
    ReportType.MONTHLY: "monthly moods:",
    ReportType.THIRTY_DAYS: "30-day interval moods:",
    ReportType.LAST_MONTH: "30-day mood:",
    ReportType.YEARLY: "365-day mood:",
    ReportType.MOVING: "30-day moving mood:",
}


@dataclass(frozen=True)
class ReportBucket:
    """A labeled span of days (inclusive) and its summed score."""

    label: str
    start: date
    end: date
    score: int

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def matches_tags(record: Record, tags: Iterable[str]) -> bool:
    """OR filter: any shared tag matches; an empty filter matches everything."""
    return record.matches(tags)


def daily_scores(records: Iterable[Record], tags: Iterable[str] = ()) -> dict[date, int]:
    """
    Roll records up into one score per day.

    Only days with at least one matching record are present.
    Pure function - no I/O.
    """
    if isinstance(tags, str):
        raise ValidationError("Tag filter must be a collection of strings, not a string")
    tags = frozenset(tags)
    totals: dict[date, int] = {}
    for record in records:
        if matches_tags(record, tags):
            totals[record.date] = totals.get(record.date, 0) + record.score
    return totals


def window_sums(scores: dict[date, int], spans: Iterable[tuple[date, date]]) -> list[int]:
    """
    Sum daily scores over each inclusive (start, end) span.

    Days are sorted once and summed as a running total, so each span costs
    two binary searches. Spans may overlap and need not be ordered.
    """
    days = sorted(scores)
    totals = list(accumulate((scores[day] for day in days), initial=0))
    sums = []
    for start, end in spans:
        if start > end:
            sums.append(0)
            continue
        sums.append(totals[bisect_right(days, end)] - totals[bisect_left(days, start)])
    return sums


# ============== Calendar helpers ==============


def week_start(day: date) -> date:
    """First day (Monday) of the week containing day."""
    offset = (day.weekday() - WEEK_START) % WEEK_DAYS
    return day - timedelta(days=offset)


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    _, last_day = calendar.monthrange(day.year, day.month)
    return day.replace(day=last_day)


def next_month(day: date) -> date:
    """First day of the month after day's month."""
    return month_end(day) + timedelta(days=1)


def trailing_window(end: date, length: int) -> tuple[date, date]:
    """The `length`-day span ending on `end`, inclusive."""
    return end - timedelta(days=length - 1), end


# ============== Span generators ==============


def weekly_spans(first: date, today: date) -> list[tuple[date, date]]:
    spans = []
    start = week_start(first)
    while start <= today:
        spans.append((start, start + timedelta(days=WEEK_DAYS - 1)))
        start += timedelta(days=WEEK_DAYS)
    return spans


def monthly_spans(first: date, today: date) -> list[tuple[date, date]]:
    spans = []
    start = month_start(first)
    while start <= today:
        spans.append((start, month_end(start)))
        start = next_month(start)
    return spans


def rolling_spans(first: date, today: date, length: int) -> list[tuple[date, date]]:
    """Non-overlapping windows ending today, stepping back until first is covered."""
    spans = []
    end = today
    while end >= first:
        spans.append(trailing_window(end, length))
        end -= timedelta(days=length)
    spans.reverse()
    return spans


def moving_spans(today: date) -> list[tuple[date, date]]:
    """One trailing window per each of the last MOVING_WINDOWS days, oldest first."""
    return [
        trailing_window(today - timedelta(days=offset), MONTH_WINDOW_DAYS)
        for offset in range(MOVING_WINDOWS - 1, -1, -1)
    ]


def _label(report_type: ReportType, start: date, end: date) -> str:
    if report_type == ReportType.WEEKLY:
        iso_year, iso_week, _ = start.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    if report_type == ReportType.MONTHLY:
        return start.strftime("%Y-%m")
    if report_type == ReportType.MOVING:
        return end.isoformat()
    return f"{start.isoformat()}..{end.isoformat()}"


def report_spans(
    report_type: ReportType,
    first: date | None,
    today: date,
) -> list[tuple[date, date]]:
    """
    Spans for a report type, oldest first.

    Args:
        report_type: Which bucketing policy to apply
        first: Earliest record date, or None if there are no records
        today: Anchor day; the last bucket always contains it

    Returns:
        List of (start, end) inclusive date pairs
    """
    if report_type == ReportType.LAST_MONTH:
        return [trailing_window(today, MONTH_WINDOW_DAYS)]
    if report_type == ReportType.YEARLY:
        return [trailing_window(today, YEAR_WINDOW_DAYS)]
    if report_type == ReportType.MOVING:
        return moving_spans(today)

    if first is None or first > today:
        return []

    if report_type == ReportType.WEEKLY:
        return weekly_spans(first, today)
    if report_type == ReportType.SEVEN_DAYS:
        return rolling_spans(first, today, WEEK_DAYS)
    if report_type == ReportType.MONTHLY:
        return monthly_spans(first, today)
    return rolling_spans(first, today, MONTH_WINDOW_DAYS)


def generate_report(
    records: Iterable[Record],
    report_type: "ReportType | str",
    tags: Iterable[str] = (),
    today: date | None = None,
    history: int | None = None,
) -> list[ReportBucket]:
    """
    Aggregate records into report buckets.

    Pure function - no I/O. Records are not mutated and may be in any order.

    Args:
        records: Journal snapshot
        report_type: ReportType or one of its tokens
        tags: OR tag filter; empty matches every record
        today: Anchor day (defaults to today)
        history: Keep only the newest N buckets of open-ended report types

    Returns:
        Buckets in chronological order (oldest first)

    Raises:
        InvalidReportType: report_type is not a known token
    """
    report_type = ReportType.parse(report_type)
    today = today or date.today()
    records = list(records)

    # The bucket axis follows the whole journal so a tag filter doesn't shift it
    first = min((r.date for r in records), default=None)
    spans = report_spans(report_type, first, today)
    if history is not None and not report_type.is_fixed:
        spans = spans[-history:] if history > 0 else []

    scores = daily_scores(records, tags)
    sums = window_sums(scores, [(start, min(end, today)) for start, end in spans])
    return [
        ReportBucket(
            label=_label(report_type, start, end),
            start=start,
            end=end,
            score=score,
        )
        for (start, end), score in zip(spans, sums)
    ]
