"""Sheet store registry — pluggable spreadsheet backend for the order book."""

import os

_sheet_store_instance = None


def get_sheet_store():
    """Return the configured sheet store (singleton).

    Uses the in-memory FakeSheetStore by default. Set SHEET_STORE=workbook and
    SHEET_WORKBOOK_PATH to keep orders in an ``.xlsx`` file.
    """
    global _sheet_store_instance
    if _sheet_store_instance is None:
        adapter = os.environ.get("SHEET_STORE", "memory")
        if adapter == "memory":
            from ordering.sheets.fake_adapter import FakeSheetStore

            _sheet_store_instance = FakeSheetStore()
        elif adapter == "workbook":
            from ordering.sheets.workbook_adapter import WorkbookSheetStore

            _sheet_store_instance = WorkbookSheetStore(os.environ.get("SHEET_WORKBOOK_PATH", "orders.xlsx"))
        else:
            raise ValueError(f"Unknown sheet store: {adapter}")
    return _sheet_store_instance


def set_sheet_store(store):
    """Install a specific sheet store (tests, scripts)."""
    global _sheet_store_instance
    _sheet_store_instance = store


def reset_sheet_store():
    """Reset the sheet store singleton (useful for testing)."""
    global _sheet_store_instance
    _sheet_store_instance = None
