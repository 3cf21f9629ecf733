"""Domain events for the Order aggregate.

Events are raised while an order is drafted, edited and placed. They are
inspected by the submission flow and in tests; the order itself is persisted
to the order book, not rebuilt from these events.
"""

from protean.fields import Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class ItemAdded:
    """A catalogue product was added to an order in a given size."""

    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = String(required=True)
    size = String(required=True)
    quantity = Integer(required=True)
    unit_price = Float(required=True)


@ordering.event(part_of="Order")
class ItemResized:
    """An item switched size and was repriced from the catalogue."""

    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_size = String(required=True)
    new_size = String(required=True)
    unit_price = Float(required=True)


@ordering.event(part_of="Order")
class ItemQuantityChanged:
    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Order")
class ItemRemoved:
    __version__ = 1

    order_id = Identifier(required=True)
    item_id = Identifier(required=True)


@ordering.event(part_of="Order")
class OrderPlaced:
    """A validated order was fixed for submission, with its spin entitlement."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)
    spin_chances = Integer(required=True)
