"""Rupiah amounts as they appear in sheets and messages (``Rp 60.000``)."""


def format_amount(amount) -> str:
    """Group thousands with dots, Indonesian style; fractions keep a comma."""
    amount = float(amount or 0)
    if amount.is_integer():
        return f"{int(amount):,}".replace(",", ".")
    whole, fraction = f"{amount:,.2f}".split(".")
    return f"{whole.replace(',', '.')},{fraction.rstrip('0')}"


def format_rupiah(amount) -> str:
    return f"Rp {format_amount(amount)}"


def parse_amount(text) -> float:
    """Inverse of ``format_amount``: ``"1.250.000"`` -> 1250000.0.

    Raises ValueError for text that is not a formatted amount.
    """
    if isinstance(text, int | float):
        return float(text)
    cleaned = str(text).strip().replace("Rp", "").strip().replace(".", "").replace(",", ".")
    return float(cleaned)
