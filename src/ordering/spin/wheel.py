"""The prize wheel — static prizes and a uniform draw.

The random source is injectable so tests can fix the outcome of a spin.
"""

import random
from dataclasses import dataclass
from enum import Enum


class PrizeCategory(Enum):
    DISCOUNT = "discount"
    COOKIE = "cookie"


@dataclass(frozen=True)
class SpinPrize:
    id: str
    label: str
    category: str
    value: str | None = None


# Landing on this label wins nothing
NO_PRIZE_LABEL = "Try Again"

PRIZES: tuple[SpinPrize, ...] = (
    SpinPrize("d5", "5% Off", PrizeCategory.DISCOUNT.value, "5%"),
    SpinPrize("d5n", "5% Off for Next order", PrizeCategory.DISCOUNT.value, "5%"),
    SpinPrize("cookie1", "Free Cookie 400ml", PrizeCategory.COOKIE.value, "Any 400ml"),
    SpinPrize("brownies", "Brownies Slice Mini", PrizeCategory.COOKIE.value, "Brownies Slice Mini"),
    SpinPrize("d10n", "10% Off for Next order", PrizeCategory.DISCOUNT.value, "10%"),
    SpinPrize("ongkir", "Gratis Ongkir", PrizeCategory.DISCOUNT.value, "Gratis Ongkir"),
)

_rng_instance = None


def get_rng() -> random.Random:
    global _rng_instance
    if _rng_instance is None:
        _rng_instance = random.Random()
    return _rng_instance


def set_rng(rng) -> None:
    global _rng_instance
    _rng_instance = rng


def reset_rng() -> None:
    global _rng_instance
    _rng_instance = None


def is_winning(prize: SpinPrize) -> bool:
    return prize.label != NO_PRIZE_LABEL


def draw_prize(prizes=PRIZES) -> SpinPrize:
    """Pick one prize uniformly; repeats across spins are allowed."""
    return prizes[get_rng().randrange(len(prizes))]
