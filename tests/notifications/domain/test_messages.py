"""Tests for message documents, order templates and WhatsApp links."""

from urllib.parse import unquote

from notifications.messages.document import MessageDocument, strip_markup
from notifications.messages.new_order import NewOrderTemplate
from notifications.messages.order_update import OrderUpdateTemplate
from notifications.messages.whatsapp import LINK_LABEL, chat_text, whatsapp_link
from shared.snapshots import ItemLine, OrderSnapshot, SpinSummary


def _make_snapshot(**overrides):
    defaults = {
        "order_id": "ORD-1700000000000-abc1234",
        "order_date": "19/10/2026",
        "name": "Siti Rahma",
        "whatsapp": "+628123456789",
        "address": "Jl. Melati No. 5, Bandung",
        "order_type": "Single (Satuan)",
        "items": (
            ItemLine(name="Nastar Klasik", size="400ml", quantity=2, subtotal=120000.0),
            ItemLine(name="Kastengel", size="800ml", quantity=1, subtotal=125000.0),
        ),
        "total": 245000.0,
    }
    defaults.update(overrides)
    return OrderSnapshot(**defaults)


class TestMessageDocument:
    def test_html_rendering(self):
        doc = MessageDocument().title("New Order").field("Order ID", "ORD-1", code=True).line("- a & b")
        assert doc.to_html() == "<b>New Order</b>\n<b>Order ID:</b> <code>ORD-1</code>\n- a &amp; b"

    def test_plain_rendering(self):
        doc = MessageDocument().title("New Order").field("Order ID", "ORD-1", code=True).blank().line("x")
        assert doc.to_plain() == "New Order\nOrder ID: ORD-1\n\nx"

    def test_user_text_is_escaped(self):
        doc = MessageDocument().field("Note", "<b>bold</b> & more")
        assert doc.to_html() == "<b>Note:</b> &lt;b&gt;bold&lt;/b&gt; &amp; more"

    def test_renderings_carry_the_same_text(self):
        doc = MessageDocument().title("T").heading("H").field("Note", "<Tom & Jerry>").line("5 > 3").blank()
        assert strip_markup(doc.to_html()) == doc.to_plain()

    def test_values(self):
        doc = MessageDocument().title("T").field("Name", "Siti").blank()
        assert doc.values() == ["T", "Name", "Siti"]


class TestNewOrderTemplate:
    def test_sections(self):
        text = NewOrderTemplate.render(_make_snapshot()).to_plain()
        assert text.startswith("New Order\n")
        assert "Order ID: ORD-1700000000000-abc1234" in text
        assert "Order Type: Single (Satuan)" in text
        assert "- Nastar Klasik 400ml x 2 = Rp 120.000" in text
        assert "Total: Rp 245.000" in text
        assert text.index("Customer") < text.index("Items") < text.index("Total")

    def test_optional_fields_are_left_out(self):
        text = NewOrderTemplate.render(_make_snapshot()).to_plain()
        assert "Note:" not in text
        assert "Sales:" not in text
        assert "Spin the Wheel" not in text
        assert "Gifts Won" not in text

    def test_note_and_sales(self):
        text = NewOrderTemplate.render(_make_snapshot(note="Kirim sore", sales="Dewi")).to_plain()
        assert "Note: Kirim sore" in text
        assert "Sales: Dewi" in text

    def test_spin_and_gifts(self):
        doc = NewOrderTemplate.render(
            _make_snapshot(),
            spin=SpinSummary(chances=2, spins_used=2, completed="Ya"),
            gifts=["5% Off", "Gratis Ongkir"],
        )
        text = doc.to_plain()
        assert "Spin Chances: 2" in text
        assert "Spin Completed: Ya" in text
        assert text.endswith("Gifts Won\n- 5% Off\n- Gratis Ongkir")
        assert text.index("Spin the Wheel") < text.index("Items")

    def test_html_and_plain_match(self):
        doc = NewOrderTemplate.render(_make_snapshot(name="Tom & <Jerry>"), gifts=["5% Off"])
        assert strip_markup(doc.to_html()) == doc.to_plain()


class TestOrderUpdateTemplate:
    def test_changes_listed(self):
        before = _make_snapshot()
        after = _make_snapshot(address="Jl. Mawar 9")
        text = OrderUpdateTemplate.render(before, after).to_plain()
        assert text.startswith("Order Updated\n")
        assert "- Address: Jl. Melati No. 5, Bandung → Jl. Mawar 9" in text
        assert "Total: Rp 245.000" in text

    def test_given_changes_are_used(self):
        text = OrderUpdateTemplate.render(_make_snapshot(), _make_snapshot(), changes=["Custom"]).to_plain()
        assert "- Custom" in text


class TestWhatsAppLink:
    def test_link_uses_digits_only(self):
        assert whatsapp_link("+62 812-3456-789", "Hi").startswith("https://wa.me/628123456789?text=")

    def test_text_is_url_encoded(self):
        link = whatsapp_link("+628123456789", "Order & total: Rp 60.000\nThanks")
        assert " " not in link
        assert "\n" not in link
        assert unquote(link.split("?text=", 1)[1]) == "Order & total: Rp 60.000\nThanks"

    def test_chat_text_appends_link(self):
        doc = NewOrderTemplate.render(_make_snapshot())
        text = chat_text(doc, "+628123456789")
        html, link = text.rsplit("\n\n", 1)
        assert html == doc.to_html()
        assert link.startswith('<a href="https://wa.me/628123456789?text=')
        assert link.endswith(f">{LINK_LABEL}</a>")

    def test_link_carries_plain_message(self):
        doc = NewOrderTemplate.render(_make_snapshot())
        link = whatsapp_link("+628123456789", doc.to_plain())
        assert unquote(link.split("?text=", 1)[1]) == doc.to_plain()
