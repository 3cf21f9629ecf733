"""Tests for WhatsApp number handling and order submission checks."""

import pytest
from ordering.order.drafting import build_order, customer_fields
from ordering.order.phone import is_valid_phone, normalize_phone
from ordering.order.validation import order_errors, validate_order
from protean.exceptions import ValidationError


class TestNormalizePhone:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("08123456789", "+628123456789"),
            ("628123456789", "+628123456789"),
            ("+628123456789", "+628123456789"),
            ("8123456789", "+628123456789"),
            ("  08123456789 ", "+628123456789"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_phone(raw) == expected


class TestIsValidPhone:
    @pytest.mark.parametrize("phone", ["08123456789", "+628123456789", "628123456789", "0812 3456 789"])
    def test_valid(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["", "0212345678", "0812345", "08123456789012345", "+18123456789", "0812abc6789"])
    def test_invalid(self, phone):
        assert not is_valid_phone(phone)


def _build(**customer):
    defaults = {"name": "Siti", "whatsapp": "08123456789", "address": "Jl. Melati 5"}
    defaults.update(customer)
    return build_order(
        order_id="ORD-1",
        order_date="19/10/2026",
        customer=defaults,
        order_type="single",
        items=[{"product_id": "kastengel", "size": "400ml", "quantity": 1}],
    )


class TestCustomerFields:
    def test_values_are_trimmed_and_phone_normalized(self):
        fields = customer_fields(name="  Siti ", whatsapp="08123456789", address=" Bandung ", note=None)
        assert fields == {
            "name": "Siti",
            "whatsapp": "+628123456789",
            "address": "Bandung",
            "note": "",
            "sales": "",
        }


class TestOrderValidation:
    def test_complete_order_has_no_errors(self):
        assert order_errors(_build()) == {}
        validate_order(_build())

    def test_missing_fields_in_form_order(self):
        order = build_order("ORD-1", "19/10/2026", {}, "single", [])
        errors = order_errors(order)
        assert list(errors) == ["name", "whatsapp", "address", "items"]

    def test_blank_name(self):
        errors = order_errors(_build(name="   "))
        assert list(errors) == ["name"]

    def test_invalid_whatsapp(self):
        errors = order_errors(_build(whatsapp="12345"))
        assert errors["whatsapp"] == ["WhatsApp number is not a valid Indonesian mobile number"]

    def test_unknown_products_leave_order_empty(self):
        order = build_order(
            "ORD-1",
            "19/10/2026",
            {"name": "Siti", "whatsapp": "08123456789", "address": "Bandung"},
            "single",
            [{"product_id": "nope", "size": "400ml", "quantity": 2}],
        )
        assert list(order_errors(order)) == ["items"]

    def test_validate_order_raises(self):
        with pytest.raises(ValidationError) as exc:
            validate_order(_build(address=""))
        assert "address" in exc.value.messages
