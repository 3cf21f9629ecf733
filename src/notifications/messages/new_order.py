"""New order message — sent to the staff chat once an order is submitted."""

from notifications.messages.document import MessageDocument
from shared.money import format_rupiah
from shared.snapshots import OrderSnapshot, SpinSummary


def item_line(item) -> str:
    return f"- {item.name} {item.size} x {item.quantity} = {format_rupiah(item.subtotal)}"


class NewOrderTemplate:
    @staticmethod
    def render(order: OrderSnapshot, spin: SpinSummary | None = None, gifts=()) -> MessageDocument:
        doc = MessageDocument()
        doc.title("New Order").blank()

        doc.heading("Order Info")
        doc.field("Order ID", order.order_id, code=True)
        doc.field("Date", order.order_date)
        doc.field("Order Type", order.order_type)
        doc.blank()

        doc.heading("Customer")
        doc.field("Name", order.name)
        doc.field("WhatsApp", order.whatsapp, code=True)
        doc.field("Address", order.address)
        if order.note:
            doc.field("Note", order.note)
        if order.sales:
            doc.field("Sales", order.sales)
        doc.blank()

        if spin is not None:
            doc.heading("Spin the Wheel")
            doc.field("Spin Chances", spin.chances)
            doc.field("Spins Used", spin.spins_used)
            doc.field("Spin Completed", spin.completed)
            doc.blank()

        doc.heading("Items")
        for item in order.items:
            doc.line(item_line(item))
        doc.blank()
        doc.field("Total", format_rupiah(order.total))

        if gifts:
            doc.blank()
            doc.heading("Gifts Won")
            for gift in gifts:
                doc.line(f"- {gift}")

        return doc
