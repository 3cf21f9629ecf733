"""Change reports between two versions of an order."""

from shared.snapshots import OrderSnapshot

NO_CHANGES = "No changes detected."
EMPTY = "(empty)"

_SCALAR_FIELDS = (
    ("Name", "name"),
    ("WhatsApp", "whatsapp"),
    ("Address", "address"),
    ("Note", "note"),
    ("Sales", "sales"),
    ("Order Type", "order_type"),
)


def _shown(value) -> str:
    value = str(value or "").strip()
    return value or EMPTY


def _quantities(snapshot: OrderSnapshot) -> dict[str, tuple[str, str, int]]:
    lines: dict[str, tuple[str, str, int]] = {}
    for item in snapshot.items:
        _, _, quantity = lines.get(item.key, (item.name, item.size, 0))
        lines[item.key] = (item.name, item.size, quantity + item.quantity)
    return lines


def detect_changes(before: OrderSnapshot, after: OrderSnapshot) -> list[str]:
    """Ordered, human-readable changes from ``before`` to ``after``.

    Scalar fields come first, then items matched by name and size: additions,
    removals, then quantity updates. A price change on an unchanged quantity
    is not reported.
    """
    changes = []

    for label, attribute in _SCALAR_FIELDS:
        old = str(getattr(before, attribute) or "").strip()
        new = str(getattr(after, attribute) or "").strip()
        if old != new:
            changes.append(f"{label}: {_shown(old)} → {_shown(new)}")

    old_items = _quantities(before)
    new_items = _quantities(after)

    changes.extend(
        f"Added: {name} {size} x {quantity}"
        for key, (name, size, quantity) in new_items.items()
        if key not in old_items
    )
    changes.extend(
        f"Removed: {name} {size} x {quantity}"
        for key, (name, size, quantity) in old_items.items()
        if key not in new_items
    )
    changes.extend(
        f"Updated: {name} {size} qty {old_items[key][2]}→{quantity}"
        for key, (name, size, quantity) in new_items.items()
        if key in old_items and old_items[key][2] != quantity
    )

    return changes or [NO_CHANGES]
