"""Click-to-chat links carrying the plain rendering of a message."""

from urllib.parse import quote

WA_BASE = "https://wa.me"
LINK_LABEL = "Send to WhatsApp"


def whatsapp_link(phone: str, text: str) -> str:
    digits = "".join(ch for ch in (phone or "") if ch.isdigit())
    return f"{WA_BASE}/{digits}?text={quote(text)}"


def chat_text(document, phone: str) -> str:
    """HTML message for the staff chat, followed by the deep link to the customer."""
    link = whatsapp_link(phone, document.to_plain())
    return f'{document.to_html()}\n\n<a href="{link}">{LINK_LABEL}</a>'
