"""File-based journal storage adapter."""

import os
from datetime import date
from pathlib import Path
from typing import Iterable

from howdy.core.record import Record
from howdy.errors import CorruptJournalError


class FileJournalStore:
    """
    File-based journal storage.

    Implements JournalStore protocol. All records live in a single
    append-only UTF-8 text file, one record per line. Reports replay the
    whole file; nothing is cached.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def exists(self) -> bool:
        """Check if the journal file exists."""
        return self.path.exists()

    def append(
        self,
        record_date: date,
        score: int,
        tags: Iterable[str] = (),
        comment: str = "",
    ) -> Record:
        """
        Validate and append one record.

        Validation happens before the file is opened, so a rejected record
        leaves the file untouched. A hand-edited file whose last line lacks
        a newline gets one first, so the record always starts its own line.
        OSError from the file system propagates.
        """
        record = Record.create(record_date, score, tags, comment)
        data = (record.to_line() + "\n").encode("utf-8")
        with self.path.open("a+b") as f:
            if f.seek(0, os.SEEK_END) > 0:
                f.seek(-1, os.SEEK_END)
                if f.read(1) != b"\n":
                    data = b"\n" + data
            f.write(data)
        return record

    def read_all(self) -> list[Record]:
        """
        Read every record in file order.

        Raises:
            FileNotFoundError: The journal file does not exist
            CorruptJournalError: A line could not be parsed (1-based line number)
        """
        records = []
        # Decode per line so an encoding error is reported with its line number
        with self.path.open("rb") as f:
            for line_number, raw in enumerate(f, start=1):
                try:
                    records.append(Record.from_line(raw.decode("utf-8")))
                except ValueError as e:
                    line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                    raise CorruptJournalError(self.path, line_number, line, str(e))
        return records
