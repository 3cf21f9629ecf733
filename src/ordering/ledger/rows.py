"""Typed records for the order sheets.

Rows arrive from the sheet store as loosely typed dicts (numbers may come
back as text, cells may be blank). They are parsed into frozen records here
and nowhere else; values that cannot be parsed fall back to safe defaults.
"""

import re
from dataclasses import dataclass

from ordering.order.order import ORDER_TYPE_LABELS, OrderType
from ordering.spin.eligibility import GiftEligibility, SpinCompletion, spin_chances
from shared.money import format_rupiah, parse_amount

ORDERS_SHEET = "Orders"
ITEMS_SHEET = "Cookie Details"
REWARDS_SHEET = "Spin Rewards"

ORDER_HEADERS = [
    "Order ID",
    "Order Date",
    "Customer Name",
    "WhatsApp",
    "Address",
    "Note",
    "Sales",
    "Order Type",
    "Items",
    "Total",
    "Eligible for Gift",
    "Spins Used",
    "Spin Completed",
]
ITEM_HEADERS = ["Order ID", "Customer Name", "Cookie Name", "Size", "Quantity", "Subtotal"]
REWARD_HEADERS = ["Order ID", "Customer Name", "Gift"]

SUMMARY_SEPARATOR = " | "
_SUMMARY_ENTRY = re.compile(r"^(.+?)\s+(400ml|600ml|800ml|Satuan)\s+x\s+(\d+)\s+=\s+Rp\s+([\d.,]+)$")

_SPIN_COMPLETIONS = {completion.value for completion in SpinCompletion}


def _text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _number(value, default=0.0) -> float:
    if value in (None, ""):
        return default
    try:
        return parse_amount(value)
    except ValueError:
        return default


def _count(value) -> int:
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError):
        return 0


def order_type_from_label(label: str) -> str:
    if _text(label).lower() == ORDER_TYPE_LABELS[OrderType.HAMPERS.value].lower():
        return OrderType.HAMPERS.value
    return OrderType.SINGLE.value


# ---------------------------------------------------------------------------
# Items summary
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SummaryEntry:
    name: str
    size: str
    quantity: int
    subtotal: float


def format_items_summary(lines) -> str:
    """``Nastar Klasik 400ml x 2 = Rp 120.000 | Kastengel 600ml x 1 = Rp 95.000``"""
    return SUMMARY_SEPARATOR.join(
        f"{line.name} {line.size} x {line.quantity} = {format_rupiah(line.subtotal)}" for line in lines
    )


def parse_items_summary(text) -> list[SummaryEntry]:
    """Parse an Items cell; entries that do not match the summary format are skipped."""
    entries = []
    for chunk in _text(text).split("|"):
        match = _SUMMARY_ENTRY.match(chunk.strip())
        if match is None:
            continue
        name, size, quantity, subtotal = match.groups()
        try:
            amount = parse_amount(subtotal)
        except ValueError:
            continue
        entries.append(SummaryEntry(name=name.strip(), size=size, quantity=int(quantity), subtotal=amount))
    return entries


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class OrderRow:
    order_id: str
    order_date: str = ""
    customer_name: str = ""
    whatsapp: str = ""
    address: str = ""
    note: str = ""
    sales: str = ""
    order_type: str = OrderType.SINGLE.value
    items_summary: str = ""
    total: float = 0.0
    eligible_for_gift: bool = False
    spins_used: int = 0
    spin_completed: str = SpinCompletion.NO.value

    @property
    def spin_chances(self) -> int:
        return spin_chances(self.total)

    @classmethod
    def from_record(cls, record: dict) -> "OrderRow":
        total = _number(record.get("Total"))

        eligible_text = _text(record.get("Eligible for Gift"))
        if eligible_text == GiftEligibility.YES.value:
            eligible = True
        elif eligible_text == GiftEligibility.NO.value:
            eligible = False
        else:
            eligible = spin_chances(total) >= 1

        completed = _text(record.get("Spin Completed"))
        if completed not in _SPIN_COMPLETIONS:
            completed = SpinCompletion.NO.value

        return cls(
            order_id=_text(record.get("Order ID")),
            order_date=_text(record.get("Order Date")),
            customer_name=_text(record.get("Customer Name")),
            whatsapp=_text(record.get("WhatsApp")),
            address=_text(record.get("Address")),
            note=_text(record.get("Note")),
            sales=_text(record.get("Sales")),
            order_type=order_type_from_label(record.get("Order Type")),
            items_summary=_text(record.get("Items")),
            total=total,
            eligible_for_gift=eligible,
            spins_used=_count(record.get("Spins Used")),
            spin_completed=completed,
        )

    def to_record(self) -> dict:
        return {
            "Order ID": self.order_id,
            "Order Date": self.order_date,
            "Customer Name": self.customer_name,
            "WhatsApp": self.whatsapp,
            "Address": self.address,
            "Note": self.note,
            "Sales": self.sales,
            "Order Type": ORDER_TYPE_LABELS[self.order_type],
            "Items": self.items_summary,
            "Total": self.total,
            "Eligible for Gift": (GiftEligibility.YES if self.eligible_for_gift else GiftEligibility.NO).value,
            "Spins Used": self.spins_used,
            "Spin Completed": self.spin_completed,
        }


@dataclass(frozen=True)
class ItemRow:
    order_id: str
    customer_name: str
    cookie_name: str
    size: str
    quantity: int
    subtotal: float

    @classmethod
    def from_record(cls, record: dict) -> "ItemRow":
        return cls(
            order_id=_text(record.get("Order ID")),
            customer_name=_text(record.get("Customer Name")),
            cookie_name=_text(record.get("Cookie Name")),
            size=_text(record.get("Size")),
            quantity=_count(record.get("Quantity")),
            subtotal=_number(record.get("Subtotal")),
        )

    def to_record(self) -> dict:
        return {
            "Order ID": self.order_id,
            "Customer Name": self.customer_name,
            "Cookie Name": self.cookie_name,
            "Size": self.size,
            "Quantity": self.quantity,
            "Subtotal": self.subtotal,
        }


@dataclass(frozen=True)
class RewardRow:
    order_id: str
    customer_name: str
    gift: str

    def to_record(self) -> dict:
        return {"Order ID": self.order_id, "Customer Name": self.customer_name, "Gift": self.gift}
