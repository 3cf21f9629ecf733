"""Submission checks for an order.

Errors are collected in form order so the first key of the raised
``ValidationError`` names the first field the customer has to fix.
"""

from protean.exceptions import ValidationError

from ordering.order.phone import is_valid_phone


def order_errors(order) -> dict[str, list[str]]:
    customer = order.customer
    errors: dict[str, list[str]] = {}

    if not (customer.name or "").strip():
        errors["name"] = ["Customer name is required"]

    whatsapp = (customer.whatsapp or "").strip()
    if not whatsapp:
        errors["whatsapp"] = ["WhatsApp number is required"]
    elif not is_valid_phone(whatsapp):
        errors["whatsapp"] = ["WhatsApp number is not a valid Indonesian mobile number"]

    if not (customer.address or "").strip():
        errors["address"] = ["Address is required"]

    if not order.items:
        errors["items"] = ["Order must contain at least one item"]

    return errors


def validate_order(order) -> None:
    errors = order_errors(order)
    if errors:
        raise ValidationError(errors)
