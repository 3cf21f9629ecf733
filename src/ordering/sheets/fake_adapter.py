"""In-memory sheet store for development and tests.

Keeps every sheet as a header list plus row dicts. Failures can be switched on
per operation to exercise the alert paths of the submission flow.
"""

from ordering.sheets.port import RowHandle, SheetPort, SheetStoreError


class FakeSheetStore(SheetPort):
    def __init__(self):
        self.sheets: dict[str, dict] = {}
        self.failing_operations: set[str] = set()
        self.failing_sheets: set[str] = set()
        self.failure_reason = "Sheet store unavailable"

    def configure(self, fail_on=(), failure_reason: str = "Sheet store unavailable", sheets=()):
        """Make the listed operations (``"write_rows"``, ``"update_row"``, ...) raise.

        With ``sheets``, only operations on those sheets fail.
        """
        self.failing_operations = set(fail_on)
        self.failing_sheets = set(sheets)
        self.failure_reason = failure_reason

    def _check(self, operation: str, sheet: str):
        if operation in self.failing_operations and (not self.failing_sheets or sheet in self.failing_sheets):
            raise SheetStoreError(self.failure_reason, sheet=sheet)

    def _rows(self, sheet: str) -> list[dict]:
        if sheet not in self.sheets:
            raise SheetStoreError(f"Sheet {sheet!r} does not exist", sheet=sheet)
        return self.sheets[sheet]["rows"]

    def headers(self, sheet: str) -> list[str]:
        return list(self.sheets.get(sheet, {}).get("headers", []))

    def read_rows(self, sheet: str) -> list[dict]:
        self._check("read_rows", sheet)
        if sheet not in self.sheets:
            return []
        return [dict(row) for row in self.sheets[sheet]["rows"]]

    def write_rows(self, sheet: str, records: list[dict]) -> None:
        self._check("write_rows", sheet)
        table = self.sheets.setdefault(sheet, {"headers": [], "rows": []})
        for record in records:
            for key in record:
                if key not in table["headers"]:
                    table["headers"].append(key)
            table["rows"].append(dict(record))

    def update_row(self, handle: RowHandle, fields: dict) -> None:
        self._check("update_row", handle.sheet)
        rows = self._rows(handle.sheet)
        if not 0 <= handle.index < len(rows):
            raise SheetStoreError(f"Row {handle.index} not found", sheet=handle.sheet)
        rows[handle.index].update(fields)
        headers = self.sheets[handle.sheet]["headers"]
        headers.extend(key for key in fields if key not in headers)

    def delete_row(self, handle: RowHandle) -> None:
        self._check("delete_row", handle.sheet)
        rows = self._rows(handle.sheet)
        if not 0 <= handle.index < len(rows):
            raise SheetStoreError(f"Row {handle.index} not found", sheet=handle.sheet)
        del rows[handle.index]

    def replace_sheet(self, sheet: str, headers: list[str], records: list[dict]) -> None:
        self._check("replace_sheet", sheet)
        self.sheets[sheet] = {
            "headers": list(headers),
            "rows": [{header: record.get(header, "") for header in headers} for record in records],
        }

    def reset(self):
        """Drop all sheets and failure switches (useful between tests)."""
        self.sheets.clear()
        self.failing_operations = set()
        self.failing_sheets = set()
        self.failure_reason = "Sheet store unavailable"
