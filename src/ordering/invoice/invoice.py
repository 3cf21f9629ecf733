"""Invoices — command and handler that write an order's invoice sheet.

Each invoice lives on its own sheet named after the order; saving again
replaces the previous invoice. Staff may add extra lines (delivery, packaging)
and a percent or fixed discount on top of the order's items.
"""

import json
import math
import re
from dataclasses import dataclass
from enum import Enum

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text

from ordering.domain import ordering
from ordering.ledger.order_book import OrderBook
from ordering.order.order import Order

logger = structlog.get_logger(__name__)

INVOICE_HEADERS = ["Col1", "Col2", "Col3", "Col4"]
MAX_SHEET_NAME = 100
_FORBIDDEN_SHEET_CHARS = re.compile(r"[\\/?*\[\]]")


class DiscountType(Enum):
    PERCENT = "percent"
    FIXED = "fixed"


@dataclass(frozen=True)
class ExtraItem:
    name: str
    quantity: int
    unit_price: float

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price


def invoice_sheet_name(order_id: str) -> str:
    return _FORBIDDEN_SHEET_CHARS.sub("_", order_id)[:MAX_SHEET_NAME]


def discount_amount(subtotal: float, discount_type: str | None, value: float | None) -> float:
    """``percent``: subtotal * value / 100 rounded half-up; ``fixed``: capped at the subtotal."""
    if not discount_type or not value or value <= 0:
        return 0
    if discount_type == DiscountType.PERCENT.value:
        # Half-up, as shown on the invoice
        return math.floor(subtotal * value / 100 + 0.5)
    return min(value, subtotal)


def _row(col1="", col2="", col3="", col4=""):
    return dict(zip(INVOICE_HEADERS, (col1, col2, col3, col4)))


def invoice_rows(order: Order, extras: list[ExtraItem], discount_type=None, discount_value=0) -> tuple[list[dict], dict]:
    customer = order.customer
    subtotal = order.total + sum(extra.subtotal for extra in extras)
    discount = discount_amount(subtotal, discount_type, discount_value)
    total = subtotal - discount

    rows = [
        _row("INVOICE"),
        _row("Order ID", str(order.order_id)),
        _row("Date", order.order_date or ""),
        _row("Customer", customer.name or ""),
        _row("WhatsApp", customer.whatsapp or ""),
        _row("Address", customer.address or ""),
    ]
    if customer.note:
        rows.append(_row("Note", customer.note))
    rows.append(_row())
    rows.append(_row("Item", "Size", "Qty", "Subtotal"))
    rows.extend(_row(item.name, item.size, item.quantity, item.subtotal) for item in order.items)
    rows.extend(_row(extra.name, "-", extra.quantity, extra.subtotal) for extra in extras)
    rows.append(_row())
    rows.append(_row("Subtotal", col4=subtotal))
    if discount > 0:
        label = f"{discount_value:g}%" if discount_type == DiscountType.PERCENT.value else ""
        rows.append(_row("Diskon", label, col4=-discount))
    rows.append(_row("Total", col4=total))

    return rows, {"subtotal": subtotal, "discount": discount, "total": total}


def _parse_extras(raw) -> list[ExtraItem]:
    extras = json.loads(raw) if isinstance(raw, str) else (raw or [])
    parsed = []
    for index, extra in enumerate(extras):
        name = str(extra.get("name", "")).strip()
        try:
            quantity = int(extra.get("quantity", 0))
            unit_price = float(extra.get("unit_price", 0))
        except (TypeError, ValueError):
            raise ValidationError({"extra_items": [f"Extra item {index + 1} has an invalid quantity or price"]}) from None
        if not name:
            raise ValidationError({"extra_items": [f"Extra item {index + 1} needs a name"]})
        if quantity < 0 or unit_price < 0:
            raise ValidationError({"extra_items": [f"Extra item {index + 1} cannot be negative"]})
        parsed.append(ExtraItem(name=name, quantity=quantity, unit_price=unit_price))
    return parsed


@ordering.command(part_of="Order")
class SaveInvoice:
    order_id = String(required=True, max_length=64)
    extra_items = Text()  # JSON: list of {name, quantity, unit_price}
    discount_type = String(choices=DiscountType)
    discount_value = Float(default=0.0)


@ordering.command_handler(part_of=Order)
class SaveInvoiceHandler:
    @handle(SaveInvoice)
    def save_invoice(self, command):
        book = OrderBook()
        order = book.load(command.order_id)
        extras = _parse_extras(command.extra_items)

        rows, totals = invoice_rows(order, extras, command.discount_type, command.discount_value or 0)
        sheet = invoice_sheet_name(command.order_id)
        book.store.replace_sheet(sheet, INVOICE_HEADERS, rows)

        logger.info("Invoice saved", order_id=command.order_id, sheet=sheet, total=totals["total"])
        return {"order_id": command.order_id, "sheet": sheet, **totals}
