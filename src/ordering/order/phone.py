"""WhatsApp number handling for Indonesian mobile numbers."""

import re

_MOBILE_PATTERN = re.compile(r"^(\+62|62|0)8[1-9][0-9]{6,10}$")
_WHITESPACE = re.compile(r"\s+")


def normalize_phone(phone: str) -> str:
    """Convert a local or bare international number to ``+62`` form.

    ``08123456789`` -> ``+628123456789``; ``628123456789`` -> ``+628123456789``;
    numbers already starting with ``+`` are left alone.
    """
    phone = (phone or "").strip()
    if not phone:
        return ""
    if phone.startswith("0"):
        return "+62" + phone[1:]
    if phone.startswith("62"):
        return "+" + phone
    if phone.startswith("+"):
        return phone
    return "+62" + phone


def is_valid_phone(phone: str) -> bool:
    return bool(_MOBILE_PATTERN.match(_WHITESPACE.sub("", phone or "")))
