"""Application tests for order placement via domain.process()."""

import json
from datetime import date

import pytest
from ordering.ledger.rows import ITEMS_SHEET, ORDERS_SHEET
from ordering.order.placement import PlaceOrder
from protean import current_domain
from protean.exceptions import ValidationError

ORDER_ID = "ORD-1700000000000-abc1234"


def _place(**overrides):
    defaults = {
        "order_id": ORDER_ID,
        "order_date": "19/10/2026",
        "name": "Siti Rahma",
        "whatsapp": "08123456789",
        "address": "Jl. Melati No. 5, Bandung",
        "items": json.dumps([{"product_id": "nastar-klasik", "size": "400ml", "quantity": 2}]),
    }
    defaults.update(overrides)
    return current_domain.process(PlaceOrder(**defaults), asynchronous=False)


def _eligible_items():
    # 4 x 125.000 = 500.000, one spin at the default threshold
    return json.dumps([{"product_id": "kastengel", "size": "800ml", "quantity": 4}])


class TestPlaceOrderBelowThreshold:
    def test_result(self):
        result = _place()
        assert result == {
            "order_id": ORDER_ID,
            "order_date": "19/10/2026",
            "total": 120000,
            "spin_chances": 0,
            "stage": "Notified",
            "saved": True,
            "alerts": [],
        }

    def test_order_row_written(self, sheet_store):
        _place()
        rows = sheet_store.read_rows(ORDERS_SHEET)
        assert len(rows) == 1
        row = rows[0]
        assert row["Order ID"] == ORDER_ID
        assert row["WhatsApp"] == "+628123456789"
        assert row["Order Type"] == "Single (Satuan)"
        assert row["Items"] == "Nastar Klasik 400ml x 2 = Rp 120.000"
        assert row["Total"] == 120000
        assert row["Eligible for Gift"] == "Tidak"
        assert row["Spins Used"] == 0
        assert row["Spin Completed"] == "Tidak"

    def test_item_rows_written(self, sheet_store):
        _place(
            items=json.dumps(
                [
                    {"product_id": "nastar-klasik", "size": "400ml", "quantity": 2},
                    {"product_id": "kastengel", "size": "600ml", "quantity": 1},
                ]
            )
        )
        rows = sheet_store.read_rows(ITEMS_SHEET)
        assert [(r["Cookie Name"], r["Size"], r["Quantity"], r["Subtotal"]) for r in rows] == [
            ("Nastar Klasik", "400ml", 2, 120000),
            ("Kastengel", "600ml", 1, 95000),
        ]
        assert all(r["Customer Name"] == "Siti Rahma" for r in rows)

    def test_staff_chat_notified(self, chat):
        _place()
        assert len(chat.sent_messages) == 1
        text = chat.sent_messages[0]["text"]
        assert text.startswith("<b>New Order</b>")
        assert f"<code>{ORDER_ID}</code>" in text
        assert "https://wa.me/628123456789?text=" in text
        assert "Spin the Wheel" not in text

    def test_every_chat_receives_the_order(self, chat, monkeypatch):
        monkeypatch.setenv("TELEGRAM_CHAT_IDS", "111, 222")
        _place()
        assert [m["chat_id"] for m in chat.sent_messages] == ["111", "222"]

    def test_customer_fields_are_trimmed(self, sheet_store):
        _place(name="  Siti  ", address=" Bandung ", note=" pagi ")
        row = sheet_store.read_rows(ORDERS_SHEET)[0]
        assert row["Customer Name"] == "Siti"
        assert row["Address"] == "Bandung"
        assert row["Note"] == "pagi"

    def test_order_date_defaults_to_today(self):
        result = _place(order_date=None)
        assert result["order_date"] == date.today().strftime("%d/%m/%Y")

    def test_hampers_order(self, sheet_store):
        _place(order_type="hampers", items=json.dumps([{"product_id": "hampers2", "size": "Satuan", "quantity": 5}]))
        row = sheet_store.read_rows(ORDERS_SHEET)[0]
        assert row["Order Type"] == "Hampers"
        assert row["Total"] == 45000

    def test_zero_quantity_becomes_one(self):
        result = _place(items=json.dumps([{"product_id": "kastengel", "size": "400ml", "quantity": 0}]))
        assert result["total"] == 70000

    def test_unknown_products_are_dropped(self, sheet_store):
        _place(
            items=json.dumps(
                [
                    {"product_id": "kastengel", "size": "400ml", "quantity": 1},
                    {"product_id": "old-cookie", "size": "400ml", "quantity": 1},
                ]
            )
        )
        assert len(sheet_store.read_rows(ITEMS_SHEET)) == 1


class TestPlaceOrderAboveThreshold:
    def test_spin_offered_instead_of_notifying(self, chat):
        result = _place(items=_eligible_items())
        assert result["total"] == 500000
        assert result["spin_chances"] == 1
        assert result["stage"] == "SpinOffered"
        assert chat.sent_messages == []

    def test_order_marked_eligible(self, sheet_store):
        _place(items=_eligible_items())
        row = sheet_store.read_rows(ORDERS_SHEET)[0]
        assert row["Eligible for Gift"] == "Ya"
        assert row["Spins Used"] == 0

    def test_threshold_from_environment(self, monkeypatch):
        monkeypatch.setenv("SPIN_THRESHOLD", "50000")
        result = _place()
        assert result["spin_chances"] == 2
        assert result["stage"] == "SpinOffered"


class TestPlaceOrderRejected:
    def test_missing_fields(self, sheet_store, chat):
        with pytest.raises(ValidationError) as exc:
            _place(name="", address="")
        assert list(exc.value.messages) == ["name", "address"]
        assert sheet_store.read_rows(ORDERS_SHEET) == []
        assert chat.sent_messages == []

    def test_invalid_whatsapp(self):
        with pytest.raises(ValidationError) as exc:
            _place(whatsapp="0211234")
        assert "whatsapp" in exc.value.messages

    def test_no_items(self):
        with pytest.raises(ValidationError) as exc:
            _place(items=json.dumps([]))
        assert "items" in exc.value.messages

    def test_duplicate_order_id(self, sheet_store):
        _place()
        with pytest.raises(ValidationError) as exc:
            _place()
        assert "order_id" in exc.value.messages
        assert len(sheet_store.read_rows(ORDERS_SHEET)) == 1


class TestPlaceOrderGatewayFailures:
    def test_order_row_failure_stops_the_flow(self, sheet_store, chat):
        sheet_store.configure(fail_on=["write_rows"], failure_reason="quota exceeded")
        result = _place(items=_eligible_items())
        assert result["saved"] is False
        assert result["stage"] == "Submitted"
        assert result["alerts"] == ["Failed to save order: quota exceeded"]
        assert chat.sent_messages == []

    def test_item_rows_failure_is_an_alert(self, sheet_store, chat):
        sheet_store.configure(fail_on=["write_rows"], failure_reason="quota exceeded", sheets=[ITEMS_SHEET])
        result = _place()
        assert result["saved"] is True
        assert result["stage"] == "Notified"
        assert result["alerts"] == ["Failed to save order items: quota exceeded"]
        assert len(sheet_store.read_rows(ORDERS_SHEET)) == 1
        assert len(chat.sent_messages) == 1

    def test_chat_failure_is_an_alert(self, chat, sheet_store):
        chat.configure(should_succeed=False, failure_reason="bot blocked")
        result = _place()
        assert result["saved"] is True
        assert result["stage"] == "Notified"
        assert result["alerts"] == ["Failed to notify staff chat: bot blocked"]
        assert len(sheet_store.read_rows(ORDERS_SHEET)) == 1
