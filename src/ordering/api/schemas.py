"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class DraftItemSchema(BaseModel):
    product_id: str
    size: str = "400ml"
    quantity: int = Field(ge=0, default=1)


class OrderLineSchema(BaseModel):
    product_id: str
    name: str
    size: str
    quantity: int
    unit_price: float
    subtotal: float


class ExtraItemSchema(BaseModel):
    name: str
    quantity: int = Field(ge=0, default=1)
    unit_price: float = Field(ge=0)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    id: str
    name: str
    image: str
    base_price: float
    size_prices: dict[str, float]
    is_hampers: bool


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class QuoteRequest(BaseModel):
    order_type: str = "single"
    items: list[DraftItemSchema]


class PlaceOrderRequest(BaseModel):
    order_id: str | None = None
    name: str = ""
    whatsapp: str = ""
    address: str = ""
    note: str = ""
    sales: str = ""
    order_type: str = "single"
    items: list[DraftItemSchema]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Siti Rahma",
                    "whatsapp": "08123456789",
                    "address": "Jl. Melati No. 5, Bandung",
                    "note": "Kirim sore",
                    "order_type": "single",
                    "items": [
                        {"product_id": "nastar-klasik", "size": "400ml", "quantity": 2},
                        {"product_id": "kastengel", "size": "800ml", "quantity": 3},
                    ],
                }
            ]
        }
    }


class ReviseOrderRequest(BaseModel):
    name: str = ""
    whatsapp: str = ""
    address: str = ""
    note: str = ""
    sales: str = ""
    order_type: str = "single"
    items: list[DraftItemSchema]


class SpinFieldsRequest(BaseModel):
    spins_used: int
    spin_completed: str


class InvoiceRequest(BaseModel):
    extra_items: list[ExtraItemSchema] = Field(default_factory=list)
    discount_type: str | None = None
    discount_value: float = 0.0


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class QuoteResponse(BaseModel):
    items: list[OrderLineSchema]
    total: float
    spin_chances: int


class PlaceOrderResponse(BaseModel):
    order_id: str
    order_date: str
    total: float
    spin_chances: int
    stage: str
    saved: bool
    alerts: list[str]


class ReviseOrderResponse(BaseModel):
    order_id: str
    total: float
    saved: bool
    changes: list[str]
    notified: bool
    alerts: list[str]


class OrderResponse(BaseModel):
    order_id: str
    order_date: str
    name: str
    whatsapp: str
    address: str
    note: str
    sales: str
    order_type: str
    order_type_label: str
    items: list[OrderLineSchema]
    total: float
    eligible_for_gift: bool
    spins_used: int
    spin_completed: str
    spin_chances: int
    spin_status: str


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    count: int


class SpinSessionResponse(BaseModel):
    order_id: str
    chances: int
    spins_used: int
    remaining: int
    gifts: list[str]
    status: str


class PrizeSchema(BaseModel):
    id: str
    label: str
    category: str
    value: str | None = None


class SpinDrawResponse(SpinSessionResponse):
    prize: PrizeSchema
    alerts: list[str]


class SpinCloseResponse(SpinSessionResponse):
    spin_completed: str
    stage: str
    alerts: list[str]


class InvoiceResponse(BaseModel):
    order_id: str
    sheet: str
    subtotal: float
    discount: float
    total: float
