"""Journal record model and line format - no I/O dependencies."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

from howdy.errors import ValidationError

SCORE_MIN = -128
SCORE_MAX = 127

# Structural separator between fields; may appear inside the comment only
SEPARATOR = "|"
FIELD_COUNT = 4

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}", re.ASCII)
_SCORE_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


def _check_tag(tag: str) -> str:
    if not isinstance(tag, str) or not tag:
        raise ValidationError(f"Invalid tag {tag!r}: must be a non-empty string")
    if SEPARATOR in tag or any(c.isspace() for c in tag):
        raise ValidationError(f"Invalid tag {tag!r}: must not contain whitespace or '{SEPARATOR}'")
    return tag


@dataclass(frozen=True)
class Record:
    """
    One scored, dated journal entry.

    Validated on construction, so every Record in memory can be written
    back to the journal and read again unchanged.
    """

    date: date
    score: int
    tags: frozenset[str] = field(default_factory=frozenset)
    comment: str = ""

    def __post_init__(self):
        # datetime is a date subclass but carries a time of day
        if not isinstance(self.date, date) or isinstance(self.date, datetime):
            raise ValidationError(f"Invalid date {self.date!r}: expected a calendar day")
        if isinstance(self.score, bool) or not isinstance(self.score, int):
            raise ValidationError(f"Invalid score {self.score!r}: expected an integer")
        if not SCORE_MIN <= self.score <= SCORE_MAX:
            raise ValidationError(
                f"Score {self.score} out of range [{SCORE_MIN}, {SCORE_MAX}]"
            )
        if isinstance(self.tags, str):
            raise ValidationError("Tags must be a collection of strings, not a string")
        object.__setattr__(self, "tags", frozenset(_check_tag(t) for t in self.tags))
        if not isinstance(self.comment, str):
            raise ValidationError(f"Invalid comment {self.comment!r}: expected text")
        if "\n" in self.comment or "\r" in self.comment:
            raise ValidationError("Comment must fit on a single line")

    @classmethod
    def create(
        cls,
        record_date: date,
        score: int,
        tags: Iterable[str] = (),
        comment: str = "",
    ) -> "Record":
        """Build a record from loosely typed input (any iterable of tags)."""
        if isinstance(tags, str):
            raise ValidationError("Tags must be a collection of strings, not a string")
        return cls(date=record_date, score=score, tags=frozenset(tags), comment=comment)

    def matches(self, tags: Iterable[str]) -> bool:
        """True if the record has any of the given tags, or no tags are given."""
        if isinstance(tags, str):
            raise ValidationError("Tag filter must be a collection of strings, not a string")
        wanted = set(tags)
        return not wanted or not self.tags.isdisjoint(wanted)

    def to_line(self) -> str:
        """Serialize to a journal line (without the trailing newline)."""
        sep = f" {SEPARATOR} "
        return sep.join(
            [self.date.isoformat(), str(self.score), " ".join(sorted(self.tags)), self.comment]
        )

    @classmethod
    def from_line(cls, line: str) -> "Record":
        """
        Parse a journal line.

        Format: DATE | SCORE | TAG TAG ... | comment

        Raises ValueError describing what is wrong with the line.
        """
        line = line.rstrip("\r\n")
        if not line.strip():
            raise ValueError("empty line")

        parts = line.split(SEPARATOR, FIELD_COUNT - 1)
        if len(parts) < FIELD_COUNT:
            raise ValueError(
                f"expected {FIELD_COUNT} '{SEPARATOR}'-separated fields, found {len(parts)}"
            )
        date_field, score_field, tags_field, comment = parts

        # fromisoformat alone also takes week dates and compact forms on newer Pythons
        date_text = date_field.strip()
        if not _DATE_PATTERN.fullmatch(date_text):
            raise ValueError(f"unparsable date {date_text!r}")
        try:
            record_date = date.fromisoformat(date_text)
        except ValueError:
            raise ValueError(f"unparsable date {date_text!r}")

        # int() alone also takes underscores and non-ASCII digits
        score_text = score_field.strip()
        if not _SCORE_PATTERN.fullmatch(score_text):
            raise ValueError(f"unparsable score {score_text!r}")
        score = int(score_text)

        # One padding space follows the separator; the rest is the comment verbatim
        if comment.startswith(" "):
            comment = comment[1:]

        try:
            return cls(
                date=record_date,
                score=score,
                tags=frozenset(tags_field.split()),
                comment=comment,
            )
        except ValidationError as e:
            raise ValueError(str(e))
