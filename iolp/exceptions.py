"""Error kinds raised by the IOLP import pipeline.

Store failures are not wrapped: whatever the store raises (for the SQLAlchemy
store, ``sqlalchemy.exc.SQLAlchemyError``) propagates to the caller as-is.
"""


class IolpError(Exception):
    """Base class for import pipeline errors."""


class InputError(IolpError):
    """An input workbook is missing or unreadable."""


class SpreadsheetError(InputError):
    """A path does not resolve to a readable spreadsheet."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read spreadsheet {path}: {reason}")


class IntegrityError(IolpError):
    """Tables were not empty after the destructive delete."""

    def __init__(self, counts: dict[str, int]):
        self.counts = counts
        detail = ", ".join(f"{table}: {count}" for table, count in counts.items())
        super().__init__(f"Failed to clear tables! {detail}")
