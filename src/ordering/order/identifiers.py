"""Order identifiers and order dates."""

import random
import string
import time
from datetime import date

_BASE36 = string.digits + string.ascii_lowercase

DATE_FORMAT = "%d/%m/%Y"


def new_order_id(now_ms: int | None = None, rng: random.Random | None = None) -> str:
    """``ORD-<epoch ms>-<7 base36 chars>``, generated before anything is written."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    rng = rng or random
    suffix = "".join(rng.choice(_BASE36) for _ in range(7))
    return f"ORD-{now_ms}-{suffix}"


def format_order_date(day: date | None = None) -> str:
    return (day or date.today()).strftime(DATE_FORMAT)
