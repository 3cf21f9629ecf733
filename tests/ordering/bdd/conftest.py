"""Shared BDD fixtures and step definitions for the Ordering domain."""

import json

import pytest
from ordering.ledger.rows import ORDERS_SHEET, REWARDS_SHEET
from ordering.order.placement import PlaceOrder
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

ORDER_ID = "ORD-1700000000000-bdd0001"


@pytest.fixture()
def order_form():
    return {"order_id": ORDER_ID, "order_date": "19/10/2026", "address": "Jl. Melati No. 5, Bandung", "items": []}


@pytest.fixture()
def outcome():
    """Result or error of the last command, keyed by ``result`` / ``error``."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a customer "{name}" with WhatsApp "{whatsapp}"'))
def _(order_form, name, whatsapp):
    order_form["name"] = name
    order_form["whatsapp"] = whatsapp


@given(parsers.cfparse('the cart holds {quantity:d} "{product_id}" in "{size}"'))
def _(order_form, quantity, product_id, size):
    order_form["items"].append({"product_id": product_id, "size": size, "quantity": quantity})


@given("the order is placed")
@when("the order is placed")
def _(order_form, outcome):
    command = PlaceOrder(**{**order_form, "items": json.dumps(order_form["items"])})
    try:
        outcome["result"] = current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        outcome["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the staff chat received {count:d} message"))
@then(parsers.cfparse("the staff chat received {count:d} messages"))
def _(chat, count):
    assert len(chat.sent_messages) == count


@then(parsers.cfparse("the order shows {count:d} spins used"))
def _(sheet_store, count):
    assert sheet_store.read_rows(ORDERS_SHEET)[0]["Spins Used"] == count


@then(parsers.cfparse('the order spin is "{completed}"'))
def _(sheet_store, completed):
    assert sheet_store.read_rows(ORDERS_SHEET)[0]["Spin Completed"] == completed


@then(parsers.cfparse('the reward log lists "{gifts}"'))
def _(sheet_store, gifts):
    logged = [row["Gift"] for row in sheet_store.read_rows(REWARDS_SHEET)]
    assert logged == [gift.strip() for gift in gifts.split(",")]
