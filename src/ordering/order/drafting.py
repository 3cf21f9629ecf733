"""Turning submitted form data into Order aggregates, and quoting drafts."""

from ordering.order.order import Order, OrderType, QuantityPolicy
from ordering.order.phone import normalize_phone


def customer_fields(name="", whatsapp="", address="", note="", sales="") -> dict:
    return {
        "name": (name or "").strip(),
        "whatsapp": normalize_phone(whatsapp),
        "address": (address or "").strip(),
        "note": (note or "").strip(),
        "sales": (sales or "").strip(),
    }


def build_order(order_id, order_date, customer, order_type, items, policy=QuantityPolicy.NEW_ORDER) -> Order:
    """Draft an order and add every line through the catalogue.

    Args:
        customer: Dict with name, whatsapp, address, note, sales.
        items: Iterable of dicts with product_id, size, quantity.
    """
    order = Order.draft(
        order_id=order_id,
        order_date=order_date,
        customer=customer_fields(**customer),
        order_type=order_type or OrderType.SINGLE.value,
    )
    for line in items:
        order.add_item(
            product_id=line["product_id"],
            size=line["size"],
            quantity=line.get("quantity", 1),
            policy=policy,
        )
    return order


def quote(items, order_type=OrderType.SINGLE.value) -> Order:
    """Price a list of draft lines without saving anything."""
    return build_order(
        order_id="QUOTE",
        order_date="",
        customer={},
        order_type=order_type,
        items=items,
    )
