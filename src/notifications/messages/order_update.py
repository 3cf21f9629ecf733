"""Order update message — the change report sent after staff edit an order."""

from notifications.messages.diff import detect_changes
from notifications.messages.document import MessageDocument
from notifications.messages.new_order import item_line
from shared.money import format_rupiah
from shared.snapshots import OrderSnapshot


class OrderUpdateTemplate:
    @staticmethod
    def render(before: OrderSnapshot, after: OrderSnapshot, changes=None) -> MessageDocument:
        changes = changes if changes is not None else detect_changes(before, after)

        doc = MessageDocument()
        doc.title("Order Updated").blank()
        doc.field("Order ID", after.order_id, code=True)
        doc.field("Customer", after.name)
        doc.blank()

        doc.heading("Changes")
        for change in changes:
            doc.line(f"- {change}")
        doc.blank()

        doc.heading("Items")
        for item in after.items:
            doc.line(item_line(item))
        doc.blank()
        doc.field("Total", format_rupiah(after.total))
        return doc
