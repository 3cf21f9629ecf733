"""Tests for the sheet store adapters and their registry."""

import pytest
from openpyxl import load_workbook
from ordering.sheets import get_sheet_store, reset_sheet_store, set_sheet_store
from ordering.sheets.fake_adapter import FakeSheetStore
from ordering.sheets.port import RowHandle, SheetStoreError
from ordering.sheets.workbook_adapter import WorkbookSheetStore


def _by_id(order_id):
    return lambda record: record.get("Order ID") == order_id


class SheetStoreContract:
    """Behaviour every adapter shares; subclasses provide ``store``."""

    def test_missing_sheet_has_no_rows(self, store):
        assert store.read_rows("Orders") == []

    def test_write_and_read(self, store):
        store.write_rows("Orders", [{"Order ID": "A", "Total": 100}, {"Order ID": "B", "Total": 200}])
        assert store.read_rows("Orders") == [{"Order ID": "A", "Total": 100}, {"Order ID": "B", "Total": 200}]

    def test_new_columns_are_added(self, store):
        store.write_rows("Orders", [{"Order ID": "A"}])
        store.write_rows("Orders", [{"Order ID": "B", "Note": "x"}])
        rows = store.read_rows("Orders")
        assert rows[1] == {"Order ID": "B", "Note": "x"}
        assert rows[0].get("Note", "") == ""

    def test_find_row(self, store):
        store.write_rows("Orders", [{"Order ID": "A"}, {"Order ID": "B"}])
        handle = store.find_row("Orders", _by_id("B"))
        assert handle == RowHandle(sheet="Orders", index=1)
        assert handle.record["Order ID"] == "B"
        assert store.find_row("Orders", _by_id("Z")) is None

    def test_update_row_keeps_other_columns(self, store):
        store.write_rows("Orders", [{"Order ID": "A", "Spins Used": 0, "Spin Completed": "Tidak"}])
        store.update_row(store.find_row("Orders", _by_id("A")), {"Spins Used": 2, "Spin Completed": "Ya"})
        assert store.read_rows("Orders") == [{"Order ID": "A", "Spins Used": 2, "Spin Completed": "Ya"}]

    def test_update_missing_row(self, store):
        store.write_rows("Orders", [{"Order ID": "A"}])
        with pytest.raises(SheetStoreError):
            store.update_row(RowHandle(sheet="Orders", index=5), {"Order ID": "Z"})

    def test_update_missing_sheet(self, store):
        with pytest.raises(SheetStoreError):
            store.update_row(RowHandle(sheet="Nope", index=0), {"Order ID": "Z"})

    def test_delete_row(self, store):
        store.write_rows("Items", [{"Order ID": "A"}, {"Order ID": "B"}, {"Order ID": "C"}])
        store.delete_row(store.find_row("Items", _by_id("B")))
        assert [row["Order ID"] for row in store.read_rows("Items")] == ["A", "C"]

    def test_replace_sheet(self, store):
        store.write_rows("INV", [{"Col1": "old"}])
        store.replace_sheet("INV", ["Col1", "Col2"], [{"Col1": "new", "Col2": 1}, {"Col1": "x"}])
        assert store.read_rows("INV") == [{"Col1": "new", "Col2": 1}, {"Col1": "x", "Col2": ""}]

    def test_sheets_are_independent(self, store):
        store.write_rows("Orders", [{"Order ID": "A"}])
        store.write_rows("Spin Rewards", [{"Order ID": "A", "Gift": "5% Off"}])
        assert len(store.read_rows("Orders")) == 1
        assert store.read_rows("Spin Rewards")[0]["Gift"] == "5% Off"


class TestFakeSheetStore(SheetStoreContract):
    @pytest.fixture()
    def store(self):
        return FakeSheetStore()

    def test_configured_failure(self, store):
        store.configure(fail_on=["write_rows"], failure_reason="quota exceeded")
        with pytest.raises(SheetStoreError, match="quota exceeded") as exc:
            store.write_rows("Orders", [{"Order ID": "A"}])
        assert exc.value.sheet == "Orders"
        assert store.read_rows("Orders") == []

    def test_reset(self, store):
        store.write_rows("Orders", [{"Order ID": "A"}])
        store.configure(fail_on=["read_rows"])
        store.reset()
        assert store.read_rows("Orders") == []

    def test_headers(self, store):
        store.write_rows("Orders", [{"Order ID": "A", "Total": 1}])
        assert store.headers("Orders") == ["Order ID", "Total"]


class TestWorkbookSheetStore(SheetStoreContract):
    @pytest.fixture()
    def store(self, tmp_path):
        return WorkbookSheetStore(tmp_path / "orders.xlsx")

    def test_file_survives_new_adapter(self, store):
        store.write_rows("Orders", [{"Order ID": "A"}])
        assert WorkbookSheetStore(store.path).read_rows("Orders") == [{"Order ID": "A"}]

    def test_header_row_is_bold(self, store):
        store.write_rows("Orders", [{"Order ID": "A"}])
        worksheet = load_workbook(store.path)["Orders"]
        assert worksheet.cell(row=1, column=1).value == "Order ID"
        assert worksheet.cell(row=1, column=1).font.bold

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_text("not a workbook")
        with pytest.raises(SheetStoreError):
            WorkbookSheetStore(path).read_rows("Orders")


class TestSheetStoreRegistry:
    def test_default_is_memory(self):
        assert isinstance(get_sheet_store(), FakeSheetStore)

    def test_singleton(self):
        assert get_sheet_store() is get_sheet_store()

    def test_workbook_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SHEET_STORE", "workbook")
        monkeypatch.setenv("SHEET_WORKBOOK_PATH", str(tmp_path / "book.xlsx"))
        reset_sheet_store()
        store = get_sheet_store()
        assert isinstance(store, WorkbookSheetStore)
        assert store.path == tmp_path / "book.xlsx"

    def test_unknown_store(self, monkeypatch):
        monkeypatch.setenv("SHEET_STORE", "postgres")
        reset_sheet_store()
        with pytest.raises(ValueError):
            get_sheet_store()

    def test_set_sheet_store(self):
        store = FakeSheetStore()
        set_sheet_store(store)
        assert get_sheet_store() is store
