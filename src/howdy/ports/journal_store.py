"""Journal storage interface."""

from datetime import date
from typing import Iterable, Protocol, runtime_checkable

from howdy.core.record import Record


@runtime_checkable
class JournalStore(Protocol):
    """Interface for appending and replaying journal records."""

    def append(
        self,
        record_date: date,
        score: int,
        tags: Iterable[str] = (),
        comment: str = "",
    ) -> Record:
        """Validate and append one record. Existing records are never rewritten."""
        ...

    def read_all(self) -> list[Record]:
        """Read every record in append order."""
        ...
