"""Order placement — command and handler.

Placing an order validates the form, writes the order to the order book and
then either offers the prize wheel (eligible totals) or notifies the staff
chat straight away.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text

from ordering.domain import ordering
from ordering.ledger.order_book import OrderBook
from ordering.order.drafting import build_order
from ordering.order.identifiers import format_order_date
from ordering.order.order import Order, OrderType, QuantityPolicy
from ordering.order.submission import Submission
from ordering.order.validation import validate_order

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    order_id = String(required=True, max_length=64)
    order_date = String(max_length=10)
    name = String(max_length=255, default="")
    whatsapp = String(max_length=30, default="")
    address = String(max_length=1000, default="")
    note = String(max_length=1000, default="")
    sales = String(max_length=100, default="")
    order_type = String(choices=OrderType, default=OrderType.SINGLE.value)
    items = Text(required=True)  # JSON: list of {product_id, size, quantity}


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        order = build_order(
            order_id=command.order_id,
            order_date=command.order_date or format_order_date(),
            customer={
                "name": command.name,
                "whatsapp": command.whatsapp,
                "address": command.address,
                "note": command.note,
                "sales": command.sales,
            },
            order_type=command.order_type,
            items=items,
            policy=QuantityPolicy.NEW_ORDER,
        )
        validate_order(order)

        order_id = str(order.order_id)
        book = OrderBook()
        if book.order_exists(order_id):
            raise ValidationError({"order_id": [f"Order {order_id} already exists"]})

        chances = order.place()
        submission = Submission(order_id)
        saved = submission.persist(book, order)

        if saved and chances >= 1:
            submission.offer_spin()
        elif saved:
            submission.notify(order.snapshot())

        logger.info(
            "Order placed",
            order_id=order_id,
            total=order.total,
            spin_chances=chances,
            stage=submission.stage.value,
            alerts=len(submission.alerts),
        )
        return {
            "order_id": order_id,
            "order_date": order.order_date,
            "total": order.total,
            "spin_chances": chances,
            "stage": submission.stage.value,
            "saved": saved,
            "alerts": submission.alerts,
        }
