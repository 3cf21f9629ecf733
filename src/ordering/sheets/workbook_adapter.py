"""Workbook sheet store — keeps the order sheets in a local ``.xlsx`` file.

Every operation opens the workbook, applies the change and saves it again, so
the file on disk is always the source of truth. Row 1 of each worksheet holds
the headers.
"""

from pathlib import Path
from zipfile import BadZipFile

import structlog
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils.exceptions import InvalidFileException

from ordering.sheets.port import RowHandle, SheetPort, SheetStoreError

logger = structlog.get_logger(__name__)

_HEADER_FONT = Font(bold=True)


class WorkbookSheetStore(SheetPort):
    def __init__(self, path):
        self.path = Path(path)

    # -------------------------------------------------------------------
    # Workbook access
    # -------------------------------------------------------------------
    def _open(self, sheet: str | None = None) -> Workbook:
        try:
            if self.path.exists():
                return load_workbook(self.path)
        except (OSError, BadZipFile, InvalidFileException, KeyError) as exc:
            raise SheetStoreError(f"Cannot open workbook {self.path}: {exc}", sheet=sheet) from exc

        workbook = Workbook()
        workbook.remove(workbook.active)
        return workbook

    def _save(self, workbook: Workbook, sheet: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            workbook.save(self.path)
        except OSError as exc:
            raise SheetStoreError(f"Cannot save workbook {self.path}: {exc}", sheet=sheet) from exc

    @staticmethod
    def _headers(worksheet) -> list[str]:
        if worksheet.max_row < 1:
            return []
        return [cell.value for cell in worksheet[1] if cell.value not in (None, "")]

    @staticmethod
    def _set_header(worksheet, column: int, header: str) -> None:
        cell = worksheet.cell(row=1, column=column, value=header)
        cell.font = _HEADER_FONT

    def _ensure_headers(self, worksheet, keys) -> list[str]:
        headers = self._headers(worksheet)
        for key in keys:
            if key not in headers:
                headers.append(key)
                self._set_header(worksheet, len(headers), key)
        return headers

    def _worksheet(self, workbook: Workbook, sheet: str):
        if sheet not in workbook.sheetnames:
            raise SheetStoreError(f"Sheet {sheet!r} does not exist", sheet=sheet)
        return workbook[sheet]

    # -------------------------------------------------------------------
    # Port
    # -------------------------------------------------------------------
    def read_rows(self, sheet: str) -> list[dict]:
        workbook = self._open(sheet)
        if sheet not in workbook.sheetnames:
            return []

        worksheet = workbook[sheet]
        headers = self._headers(worksheet)
        if not headers:
            return []

        # Blank rows are kept so record positions match worksheet rows
        records = []
        for values in worksheet.iter_rows(min_row=2, max_col=len(headers), values_only=True):
            records.append({header: ("" if value is None else value) for header, value in zip(headers, values)})
        return records

    def write_rows(self, sheet: str, records: list[dict]) -> None:
        workbook = self._open(sheet)
        worksheet = workbook[sheet] if sheet in workbook.sheetnames else workbook.create_sheet(sheet)
        for record in records:
            headers = self._ensure_headers(worksheet, record.keys())
            worksheet.append([record.get(header, "") for header in headers])
        self._save(workbook, sheet)
        logger.debug("Rows written to sheet", sheet=sheet, count=len(records), path=str(self.path))

    def update_row(self, handle: RowHandle, fields: dict) -> None:
        workbook = self._open(handle.sheet)
        worksheet = self._worksheet(workbook, handle.sheet)
        row = handle.index + 2
        if handle.index < 0 or row > worksheet.max_row:
            raise SheetStoreError(f"Row {handle.index} not found", sheet=handle.sheet)

        headers = self._ensure_headers(worksheet, fields.keys())
        for key, value in fields.items():
            worksheet.cell(row=row, column=headers.index(key) + 1, value=value)
        self._save(workbook, handle.sheet)

    def delete_row(self, handle: RowHandle) -> None:
        workbook = self._open(handle.sheet)
        worksheet = self._worksheet(workbook, handle.sheet)
        row = handle.index + 2
        if handle.index < 0 or row > worksheet.max_row:
            raise SheetStoreError(f"Row {handle.index} not found", sheet=handle.sheet)

        worksheet.delete_rows(row)
        self._save(workbook, handle.sheet)

    def replace_sheet(self, sheet: str, headers: list[str], records: list[dict]) -> None:
        workbook = self._open(sheet)
        if sheet in workbook.sheetnames:
            workbook.remove(workbook[sheet])

        worksheet = workbook.create_sheet(sheet)
        for column, header in enumerate(headers, start=1):
            self._set_header(worksheet, column, header)
        for record in records:
            worksheet.append([record.get(header, "") for header in headers])
        self._save(workbook, sheet)
        logger.debug("Sheet replaced", sheet=sheet, count=len(records), path=str(self.path))
