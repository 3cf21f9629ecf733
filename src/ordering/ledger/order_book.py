"""Order book — maps Order aggregates to rows of the order sheets.

The order book is the system of record for placed orders: one "Orders" row
per order, one "Cookie Details" row per line item and one "Spin Rewards" row
per prize won. Every read goes through the typed records in ``rows``.
"""

from datetime import date, datetime

import structlog
from protean.exceptions import ObjectNotFoundError

from ordering.catalog.products import SIZE_OPTIONS, find_product_by_name
from ordering.ledger.rows import (
    ITEMS_SHEET,
    ORDERS_SHEET,
    REWARDS_SHEET,
    ItemRow,
    OrderRow,
    RewardRow,
    format_items_summary,
    parse_items_summary,
)
from ordering.order.drafting import customer_fields
from ordering.order.identifiers import DATE_FORMAT
from ordering.order.order import Order, OrderItem, SpinState
from ordering.sheets import get_sheet_store
from ordering.spin.eligibility import GiftEligibility

logger = structlog.get_logger(__name__)


def _matches_order(order_id):
    return lambda record: str(record.get("Order ID", "")).strip() == order_id


def _order_date(row: OrderRow) -> date:
    try:
        return datetime.strptime(row.order_date, DATE_FORMAT).date()
    except ValueError:
        return date.min


def row_for(order: Order) -> OrderRow:
    customer = order.customer
    return OrderRow(
        order_id=str(order.order_id),
        order_date=order.order_date or "",
        customer_name=customer.name or "",
        whatsapp=customer.whatsapp or "",
        address=customer.address or "",
        note=customer.note or "",
        sales=customer.sales or "",
        order_type=order.order_type,
        items_summary=format_items_summary(order.items),
        total=order.total,
        eligible_for_gift=order.spin.eligible_for_gift == GiftEligibility.YES.value,
        spins_used=order.spin.spins_used,
        spin_completed=order.spin.spin_completed,
    )


def item_rows_for(order: Order) -> list[ItemRow]:
    return [
        ItemRow(
            order_id=str(order.order_id),
            customer_name=order.customer.name or "",
            cookie_name=item.name,
            size=item.size,
            quantity=item.quantity,
            subtotal=item.subtotal,
        )
        for item in order.items
    ]


class OrderBook:
    def __init__(self, store=None):
        self.store = store or get_sheet_store()

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def order_exists(self, order_id: str) -> bool:
        return self.store.find_row(ORDERS_SHEET, _matches_order(order_id)) is not None

    def get_row(self, order_id: str) -> OrderRow:
        handle = self.store.find_row(ORDERS_SHEET, _matches_order(order_id))
        if handle is None:
            raise ObjectNotFoundError(f"Order {order_id} does not exist")
        return OrderRow.from_record(handle.record)

    def item_rows(self, order_id: str) -> list[ItemRow]:
        return [
            ItemRow.from_record(handle.record)
            for handle in self.store.find_rows(ITEMS_SHEET, _matches_order(order_id))
        ]

    def load(self, order_id: str) -> Order:
        """Rebuild the Order aggregate of a stored order."""
        row = self.get_row(order_id)
        return self.restore(row, self.item_rows(order_id))

    def restore(self, row: OrderRow, item_rows: list[ItemRow]) -> Order:
        """Build an Order from its rows.

        Child rows are preferred. Orders saved without them fall back to the
        Items summary, where entries for products no longer in the catalogue
        are dropped.
        """
        order = Order.draft(
            order_id=row.order_id,
            order_date=row.order_date,
            customer=customer_fields(
                name=row.customer_name,
                whatsapp=row.whatsapp,
                address=row.address,
                note=row.note,
                sales=row.sales,
            ),
            order_type=row.order_type,
        )
        order.spin = SpinState(
            eligible_for_gift=(GiftEligibility.YES if row.eligible_for_gift else GiftEligibility.NO).value,
            spins_used=row.spins_used,
            spin_completed=row.spin_completed,
        )

        if item_rows:
            lines = [(item.cookie_name, item.size, item.quantity, item.subtotal, True) for item in item_rows]
        else:
            lines = [
                (entry.name, entry.size, entry.quantity, entry.subtotal, False)
                for entry in parse_items_summary(row.items_summary)
            ]

        for name, size, quantity, subtotal, keep_unknown in lines:
            product = find_product_by_name(name)
            if size not in SIZE_OPTIONS or (product is None and not keep_unknown):
                logger.debug("Skipping unrestorable order line", order_id=row.order_id, name=name, size=size)
                continue

            if quantity:
                unit_price = subtotal / quantity
            else:
                unit_price = product.price_for(size) if product else 0.0
            order.add_items(
                OrderItem(
                    product_id=product.id if product else name,
                    name=product.name if product else name,
                    image=product.image if product else "",
                    size=size,
                    unit_price=unit_price,
                    quantity=quantity,
                )
            )
        return order

    def list_orders(self, sales: str | None = None, search: str | None = None) -> list[tuple[OrderRow, list[ItemRow]]]:
        """All orders with their item rows, newest order date first."""
        items_by_order: dict[str, list[ItemRow]] = {}
        for record in self.store.read_rows(ITEMS_SHEET):
            item = ItemRow.from_record(record)
            items_by_order.setdefault(item.order_id, []).append(item)

        rows = [OrderRow.from_record(record) for record in self.store.read_rows(ORDERS_SHEET)]
        rows = [row for row in rows if row.order_id]

        if sales:
            wanted = sales.strip().lower()
            rows = [row for row in rows if row.sales.lower() == wanted]

        if search:
            term = search.strip().lower()
            rows = [
                row
                for row in rows
                if any(term in value.lower() for value in (row.order_id, row.customer_name, row.whatsapp, row.address))
            ]

        ordered = sorted(enumerate(rows), key=lambda pair: (_order_date(pair[1]), pair[0]), reverse=True)
        return [(row, items_by_order.get(row.order_id, [])) for _, row in ordered]

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def save_order_row(self, order: Order) -> None:
        self.store.write_rows(ORDERS_SHEET, [row_for(order).to_record()])
        logger.info("Order row saved", order_id=str(order.order_id), total=order.total)

    def save_item_rows(self, order: Order) -> None:
        self.store.write_rows(ITEMS_SHEET, [item.to_record() for item in item_rows_for(order)])
        logger.info("Item rows saved", order_id=str(order.order_id), count=len(order.items))

    def overwrite_order_row(self, order: Order) -> None:
        """Rewrite an existing order row, keeping its stored spin fields."""
        order_id = str(order.order_id)
        handle = self.store.find_row(ORDERS_SHEET, _matches_order(order_id))
        if handle is None:
            raise ObjectNotFoundError(f"Order {order_id} does not exist")

        stored = OrderRow.from_record(handle.record)
        record = row_for(order).to_record()
        record.update(
            {
                "Eligible for Gift": (GiftEligibility.YES if stored.eligible_for_gift else GiftEligibility.NO).value,
                "Spins Used": stored.spins_used,
                "Spin Completed": stored.spin_completed,
            }
        )
        self.store.update_row(handle, record)
        logger.info("Order row overwritten", order_id=order_id)

    def replace_item_rows(self, order: Order) -> None:
        order_id = str(order.order_id)
        handles = self.store.find_rows(ITEMS_SHEET, _matches_order(order_id))
        # Bottom-up so the remaining indexes stay valid
        for handle in sorted(handles, key=lambda h: h.index, reverse=True):
            self.store.delete_row(handle)
        if order.items:
            self.save_item_rows(order)

    def update_spin(self, order_id: str, spins_used: int, spin_completed: str) -> None:
        handle = self.store.find_row(ORDERS_SHEET, _matches_order(order_id))
        if handle is None:
            raise ObjectNotFoundError(f"Order {order_id} does not exist")
        self.store.update_row(handle, {"Spins Used": spins_used, "Spin Completed": spin_completed})
        logger.info("Spin fields updated", order_id=order_id, spins_used=spins_used, spin_completed=spin_completed)

    def append_reward(self, order_id: str, customer_name: str, gift: str) -> None:
        reward = RewardRow(order_id=order_id, customer_name=customer_name, gift=gift)
        self.store.write_rows(REWARDS_SHEET, [reward.to_record()])
