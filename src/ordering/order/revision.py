"""Order revision — staff edits of a placed order.

The stored order row is overwritten (its spin fields are kept), the item rows
are replaced, and the staff chat receives a report of what changed. Edited
items may be brought down to a quantity of zero.
"""

import json

import structlog
from protean import handle
from protean.fields import String, Text

from notifications.dispatch import notify_order_update
from ordering.domain import ordering
from ordering.ledger.order_book import OrderBook
from ordering.order.drafting import build_order
from ordering.order.order import Order, OrderType, QuantityPolicy
from ordering.order.validation import validate_order
from ordering.sheets.port import SheetStoreError
from ordering.utils.logging import order_context

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class ReviseOrder:
    order_id = String(required=True, max_length=64)
    name = String(max_length=255, default="")
    whatsapp = String(max_length=30, default="")
    address = String(max_length=1000, default="")
    note = String(max_length=1000, default="")
    sales = String(max_length=100, default="")
    order_type = String(choices=OrderType, default=OrderType.SINGLE.value)
    items = Text(required=True)  # JSON: list of {product_id, size, quantity}


@ordering.command_handler(part_of=Order)
class ReviseOrderHandler:
    @handle(ReviseOrder)
    def revise_order(self, command):
        book = OrderBook()
        before = book.load(command.order_id)

        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        after = build_order(
            order_id=command.order_id,
            order_date=before.order_date,
            customer={
                "name": command.name,
                "whatsapp": command.whatsapp,
                "address": command.address,
                "note": command.note,
                "sales": command.sales,
            },
            order_type=command.order_type,
            items=items,
            policy=QuantityPolicy.EDIT,
        )
        validate_order(after)
        after.spin = before.spin

        alerts = []
        try:
            book.overwrite_order_row(after)
        except SheetStoreError as exc:
            logger.error("Failed to update order", order_id=command.order_id, error=str(exc))
            return {
                "order_id": command.order_id,
                "total": after.total,
                "saved": False,
                "changes": [],
                "notified": False,
                "alerts": [f"Failed to update order: {exc}"],
            }

        try:
            book.replace_item_rows(after)
        except SheetStoreError as exc:
            logger.error("Failed to replace order items", order_id=command.order_id, error=str(exc))
            alerts.append(f"Failed to replace order items: {exc}")

        with order_context(command.order_id):
            changes, result = notify_order_update(before.snapshot(), after.snapshot())
        if not result.success:
            alerts.append("Failed to notify staff chat: " + ("; ".join(result.errors) or "no recipients"))

        logger.info("Order revised", order_id=command.order_id, changes=len(changes), alerts=len(alerts))
        return {
            "order_id": command.order_id,
            "total": after.total,
            "saved": True,
            "changes": changes,
            "notified": result.success,
            "alerts": alerts,
        }
