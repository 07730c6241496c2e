"""Error types raised by the journal store and report engine."""

from pathlib import Path


class HowdyError(Exception):
    """Base class for howdy errors."""

    pass


class ValidationError(HowdyError, ValueError):
    """Raised when a record is built from invalid input."""

    pass


class CorruptJournalError(HowdyError):
    """Raised when a journal line cannot be parsed."""

    def __init__(self, path: Path | str, line_number: int, line: str, reason: str):
        self.path = Path(path)
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"{self.path}: line {line_number}: {reason}")


class InvalidReportType(HowdyError, ValueError):
    """Raised for an unrecognized report type token."""

    def __init__(self, token: str, valid: list[str]):
        self.token = token
        self.valid = valid
        super().__init__(f"Unknown report type '{token}' (expected one of: {', '.join(valid)})")
