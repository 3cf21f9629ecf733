"""Read-only order snapshots shared between bounded contexts.

Ordering produces snapshots from its aggregates and ledger rows; notifications
consumes them to build messages and change reports without importing the
ordering model.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ItemLine:
    name: str
    size: str
    quantity: int
    subtotal: float

    @property
    def key(self) -> str:
        return f"{self.name}|{self.size}"


@dataclass(frozen=True)
class OrderSnapshot:
    order_id: str
    order_date: str = ""
    name: str = ""
    whatsapp: str = ""
    address: str = ""
    note: str = ""
    sales: str = ""
    order_type: str = ""
    items: tuple[ItemLine, ...] = field(default_factory=tuple)
    total: float = 0.0


@dataclass(frozen=True)
class SpinSummary:
    chances: int
    spins_used: int
    completed: str
