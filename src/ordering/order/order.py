"""Order aggregate — a customer's cookie order, from draft to placed.

An order is drafted in memory as line items are added, resized and re-counted.
Unit prices are snapshotted from the catalogue when an item is added or
resized; subtotals and the order total are always computed from the current
items and never stored on their own.

Two quantity policies exist: a new order keeps at least one of every item,
while the staff edit flow may bring an item down to zero.
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.catalog.products import Size, find_product
from ordering.domain import ordering
from ordering.order.events import (
    ItemAdded,
    ItemQuantityChanged,
    ItemRemoved,
    ItemResized,
    OrderPlaced,
)
from ordering.spin.eligibility import GiftEligibility, SpinCompletion, spin_chances
from shared.snapshots import ItemLine, OrderSnapshot


class OrderType(Enum):
    SINGLE = "single"
    HAMPERS = "hampers"


ORDER_TYPE_LABELS = {
    OrderType.SINGLE.value: "Single (Satuan)",
    OrderType.HAMPERS.value: "Hampers",
}


class QuantityPolicy(Enum):
    """Lowest quantity an item may be set to, per flow."""

    NEW_ORDER = 1
    EDIT = 0

    def clamp(self, quantity) -> int:
        return max(self.value, int(quantity or 0))


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class CustomerInfo:
    name = String(max_length=255, default="")
    whatsapp = String(max_length=30, default="")
    address = String(max_length=1000, default="")
    note = String(max_length=1000, default="")
    sales = String(max_length=100, default="")


@ordering.value_object(part_of="Order")
class SpinState:
    """Spin-the-wheel fields fixed when the order is saved.

    ``spins_used`` only ever grows; the completion flag moves from ``Tidak`` to
    ``Ya`` or ``Skipped`` when the wheel is closed.
    """

    eligible_for_gift = String(choices=GiftEligibility, default=GiftEligibility.NO.value)
    spins_used = Integer(min_value=0, default=0)
    spin_completed = String(choices=SpinCompletion, default=SpinCompletion.NO.value)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    product_id = String(required=True, max_length=100)
    name = String(required=True, max_length=255)
    image = String(max_length=255)
    size = String(required=True, choices=Size)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=0)

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_id = Identifier(identifier=True, required=True)
    order_date = String(max_length=10)  # DD/MM/YYYY
    customer = ValueObject(CustomerInfo)
    order_type = String(choices=OrderType, default=OrderType.SINGLE.value)
    items = HasMany(OrderItem)
    spin = ValueObject(SpinState)

    @classmethod
    def draft(cls, order_id, order_date, customer=None, order_type=OrderType.SINGLE.value):
        return cls(
            order_id=order_id,
            order_date=order_date,
            customer=CustomerInfo(**(customer or {})),
            order_type=order_type or OrderType.SINGLE.value,
            spin=SpinState(),
        )

    @property
    def total(self) -> float:
        return sum(item.subtotal for item in self.items)

    @property
    def order_type_label(self) -> str:
        return ORDER_TYPE_LABELS[self.order_type]

    def _find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ValidationError({"item_id": ["Item not found in order"]})
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, size, quantity=1, policy=QuantityPolicy.NEW_ORDER):
        """Add a catalogue product; unknown products are ignored and ``None`` is returned."""
        product = find_product(product_id)
        if product is None:
            return None

        item = OrderItem(
            product_id=product.id,
            name=product.name,
            image=product.image,
            size=size,
            unit_price=product.price_for(size),
            quantity=policy.clamp(quantity),
        )
        self.add_items(item)

        self.raise_(
            ItemAdded(
                order_id=str(self.order_id),
                item_id=str(item.id),
                product_id=item.product_id,
                size=item.size,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
        )
        return item

    def update_item_size(self, item_id, size):
        """Switch an item's size and reprice it from the catalogue.

        Items whose product has left the catalogue keep their size and price.
        """
        item = self._find_item(item_id)
        product = find_product(item.product_id)
        if product is None:
            return

        previous_size = item.size
        item.size = size
        item.unit_price = product.price_for(size)

        self.raise_(
            ItemResized(
                order_id=str(self.order_id),
                item_id=str(item.id),
                previous_size=previous_size,
                new_size=size,
                unit_price=item.unit_price,
            )
        )

    def update_item_quantity(self, item_id, quantity, policy=QuantityPolicy.NEW_ORDER):
        item = self._find_item(item_id)
        previous_quantity = item.quantity
        item.quantity = policy.clamp(quantity)

        self.raise_(
            ItemQuantityChanged(
                order_id=str(self.order_id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=item.quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._find_item(item_id)
        self.remove_items(item)

        self.raise_(ItemRemoved(order_id=str(self.order_id), item_id=str(item_id)))

    # -------------------------------------------------------------------
    # Submission
    # -------------------------------------------------------------------
    def place(self, threshold=None) -> int:
        """Fix the spin entitlement for a new order and return its spin chances."""
        chances = spin_chances(self.total, threshold)
        self.spin = SpinState(
            eligible_for_gift=(GiftEligibility.YES if chances >= 1 else GiftEligibility.NO).value,
            spins_used=0,
            spin_completed=SpinCompletion.NO.value,
        )

        self.raise_(
            OrderPlaced(
                order_id=str(self.order_id),
                customer_name=self.customer.name,
                total=self.total,
                item_count=len(self.items),
                spin_chances=chances,
            )
        )
        return chances

    def snapshot(self) -> OrderSnapshot:
        customer = self.customer or CustomerInfo()
        return OrderSnapshot(
            order_id=str(self.order_id),
            order_date=self.order_date or "",
            name=customer.name or "",
            whatsapp=customer.whatsapp or "",
            address=customer.address or "",
            note=customer.note or "",
            sales=customer.sales or "",
            order_type=self.order_type_label,
            items=tuple(
                ItemLine(name=item.name, size=item.size, quantity=item.quantity, subtotal=item.subtotal)
                for item in self.items
            ),
            total=self.total,
        )
