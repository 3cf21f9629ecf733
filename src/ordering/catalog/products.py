"""Static cookie catalogue — products and their per-size prices.

The catalogue is immutable and loaded at import time. Cookies are priced per
jar volume; hampers are priced per unit (``Satuan``).
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Size(Enum):
    ML_400 = "400ml"
    ML_600 = "600ml"
    ML_800 = "800ml"
    UNIT = "Satuan"


SIZE_OPTIONS = tuple(size.value for size in Size)

# 400ml = 1x, 600ml = 1.5x, 800ml = 2x
SIZE_MULTIPLIERS = MappingProxyType(
    {
        Size.ML_400.value: 1.0,
        Size.ML_600.value: 1.5,
        Size.ML_800.value: 2.0,
        Size.UNIT.value: 1.0,
    }
)


@dataclass(frozen=True)
class Product:
    """A catalogue entry with a price for every size it is sold in."""

    id: str
    name: str
    image: str
    base_price: int
    size_prices: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    is_hampers: bool = False

    def price_for(self, size: str) -> float:
        """Unit price for ``size``.

        Falls back to the unit price for products sold per piece, and finally
        to the base price scaled by the size multiplier.
        """
        if size in self.size_prices:
            return self.size_prices[size]
        if Size.UNIT.value in self.size_prices:
            return self.size_prices[Size.UNIT.value]
        return self.base_price * SIZE_MULTIPLIERS.get(size, 1.0)

    @property
    def default_size(self) -> str:
        return Size.UNIT.value if self.is_hampers else Size.ML_400.value


def _cookie(product_id, name, image, prices):
    sizes = dict(zip((Size.ML_400.value, Size.ML_600.value, Size.ML_800.value), prices))
    return Product(
        id=product_id,
        name=name,
        image=f"/cookies/{image}",
        base_price=prices[0],
        size_prices=MappingProxyType(sizes),
    )


def _hampers(product_id, name, image, price):
    return Product(
        id=product_id,
        name=name,
        image=f"/cookies/{image}",
        base_price=price,
        size_prices=MappingProxyType({Size.UNIT.value: price}),
        is_hampers=True,
    )


PRODUCTS: tuple[Product, ...] = (
    _cookie("nastar-klasik", "Nastar Klasik", "nastar-klasik.jpg", (60000, 80000, 100000)),
    _cookie("nastar-keju", "Nastar Keju", "nastar_keju.jpeg", (65000, 90000, 115000)),
    _cookie("cheese-garlic", "Cheese Garlic", "cheese-garlic.jpeg", (65000, 85000, 110000)),
    _cookie("sagu-keju", "Sagu Keju", "sagu_keju.jpeg", (65000, 85000, 110000)),
    _cookie("choco-nuteball", "Choco Nuteball", "choco_nutball.jpeg", (60000, 80000, 110000)),
    _cookie("kastengel", "Kastengel", "krestangel.jpeg", (70000, 95000, 125000)),
    _cookie("lidah-kucing-keju", "Lidah Kucing Keju", "lidah_kucing.jpeg", (65000,)),
    _cookie("palm-cheese", "Palm Cheese", "palm_cheese.jpeg", (60000, 80000, 100000)),
    _cookie("putri-salju-mede", "Putri Salju Mede", "putri-salju.jpeg", (60000, 80000, 100000)),
    _cookie("putri-salju-coklat", "Putri Salju Coklat", "putri-salju-coklat.jpg", (65000, 85000, 115000)),
    _cookie("chocolate-pistacio", "Chocolate Pistacio", "coklat-pistacio.jpeg", (70000, 95000, 125000)),
    _cookie("kue-kacang", "Kue Kacang", "kue-kacang.jpeg", (40000, 50000, 70000)),
    _cookie("matcha-almond", "Matcha Almond", "almond.jpg", (65000, 85000, 115000)),
    _cookie("kue-abon-bawang", "Kue Abon Bawang", "kue_abon_bawang.jpeg", (50000, 65000, 85000)),
    _cookie("choco-cheese-thumbprint", "Choco Cheese Thumbprint", "choco_cheese.jpeg", (65000, 85000, 110000)),
    _hampers("hampers1", "Hampers 1", "hampers1.jpeg", 6000),
    _hampers("hampers2", "Hampers 2", "hampers2.jpeg", 9000),
    _hampers("hampers3", "Hampers 3", "hampers3.jpeg", 19000),
    _hampers("hampers4", "Hampers 4", "hampers4.jpeg", 16000),
    _hampers("hampers5", "Hampers 5", "hampers5.jpeg", 3500),
)

_BY_ID = MappingProxyType({product.id: product for product in PRODUCTS})
_BY_NAME = MappingProxyType({product.name: product for product in PRODUCTS})

# Spellings found on orders saved before the names were corrected
LEGACY_NAMES = MappingProxyType(
    {
        "Putri Saljut Mede": "Putri Salju Mede",
        "Kue Abon Bawan": "Kue Abon Bawang",
    }
)


def find_product(product_id: str) -> Product | None:
    return _BY_ID.get(product_id)


def find_product_by_name(name: str) -> Product | None:
    if not name:
        return None
    name = name.strip()
    return _BY_NAME.get(LEGACY_NAMES.get(name, name))
