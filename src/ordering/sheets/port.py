"""Sheet store port — abstract interface for the spreadsheet-backed order store.

A sheet is a named table whose first row holds the column headers. Records
are plain dicts keyed by header. Adapters raise ``SheetStoreError`` for any
transport or storage failure; callers decide whether to alert or propagate.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field


class SheetStoreError(Exception):
    """The sheet store could not complete a read or write."""

    def __init__(self, message: str, sheet: str | None = None):
        super().__init__(message)
        self.sheet = sheet


@dataclass(frozen=True)
class RowHandle:
    """Position of a data row (0-based, header excluded) and its values when found."""

    sheet: str
    index: int
    record: dict = field(default_factory=dict, compare=False)


class SheetPort(ABC):
    """Abstract interface for sheet store adapters."""

    @abstractmethod
    def read_rows(self, sheet: str) -> list[dict]:
        """Return every data row of ``sheet``; a missing sheet has no rows."""
        ...

    @abstractmethod
    def write_rows(self, sheet: str, records: list[dict]) -> None:
        """Append records, creating the sheet and any missing header columns."""
        ...

    @abstractmethod
    def update_row(self, handle: RowHandle, fields: dict) -> None:
        """Overwrite the given columns of one row, leaving the others as they are."""
        ...

    @abstractmethod
    def delete_row(self, handle: RowHandle) -> None:
        """Delete one row. Rows below it move up by one."""
        ...

    @abstractmethod
    def replace_sheet(self, sheet: str, headers: list[str], records: list[dict]) -> None:
        """Drop ``sheet`` if it exists and recreate it with exactly these rows."""
        ...

    def find_rows(self, sheet: str, predicate: Callable[[dict], bool]) -> list[RowHandle]:
        return [
            RowHandle(sheet=sheet, index=index, record=record)
            for index, record in enumerate(self.read_rows(sheet))
            if predicate(record)
        ]

    def find_row(self, sheet: str, predicate: Callable[[dict], bool]) -> RowHandle | None:
        matches = self.find_rows(sheet, predicate)
        return matches[0] if matches else None
