"""FastAPI routes for the Ordering domain — catalogue, orders and the prize wheel."""

import json

from fastapi import APIRouter, Depends, Header
from protean.utils.globals import current_domain

from backoffice.api import require_staff
from backoffice.session import StaffSession
from ordering.api.schemas import (
    InvoiceRequest,
    InvoiceResponse,
    OrderLineSchema,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductResponse,
    QuoteRequest,
    QuoteResponse,
    ReviseOrderRequest,
    ReviseOrderResponse,
    SpinCloseResponse,
    SpinDrawResponse,
    SpinFieldsRequest,
    SpinSessionResponse,
    StatusResponse,
)
from ordering.catalog.products import PRODUCTS
from ordering.invoice.invoice import SaveInvoice
from ordering.ledger.order_book import OrderBook
from ordering.order.drafting import quote
from ordering.order.identifiers import new_order_id
from ordering.order.order import ORDER_TYPE_LABELS
from ordering.order.placement import PlaceOrder
from ordering.order.revision import ReviseOrder
from ordering.spin.eligibility import spin_chances, spin_status_for
from ordering.spin.play import CloseSpin, DrawSpin, OpenSpin, RecordSpinStatus


def _line(item) -> OrderLineSchema:
    return OrderLineSchema(
        product_id=str(item.product_id),
        name=item.name,
        size=item.size,
        quantity=item.quantity,
        unit_price=item.unit_price,
        subtotal=item.subtotal,
    )


def _order_response(row, order) -> OrderResponse:
    status = spin_status_for(row.eligible_for_gift, row.spin_chances, row.spins_used, row.spin_completed)
    return OrderResponse(
        order_id=row.order_id,
        order_date=row.order_date,
        name=row.customer_name,
        whatsapp=row.whatsapp,
        address=row.address,
        note=row.note,
        sales=row.sales,
        order_type=row.order_type,
        order_type_label=ORDER_TYPE_LABELS[row.order_type],
        items=[_line(item) for item in order.items],
        total=row.total,
        eligible_for_gift=row.eligible_for_gift,
        spins_used=row.spins_used,
        spin_completed=row.spin_completed,
        spin_chances=row.spin_chances,
        spin_status=status.value,
    )


# ---------------------------------------------------------------------------
# Catalogue Router
# ---------------------------------------------------------------------------
catalog_router = APIRouter(prefix="/products", tags=["products"])


@catalog_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    return [
        ProductResponse(
            id=product.id,
            name=product.name,
            image=product.image,
            base_price=product.base_price,
            size_prices=dict(product.size_prices),
            is_hampers=product.is_hampers,
        )
        for product in PRODUCTS
    ]


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("/quote", response_model=QuoteResponse)
async def quote_order(body: QuoteRequest) -> QuoteResponse:
    draft = quote([item.model_dump() for item in body.items], order_type=body.order_type)
    return QuoteResponse(
        items=[_line(item) for item in draft.items],
        total=draft.total,
        spin_chances=spin_chances(draft.total),
    )


@order_router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest) -> PlaceOrderResponse:
    command = PlaceOrder(
        order_id=body.order_id or new_order_id(),
        name=body.name,
        whatsapp=body.whatsapp,
        address=body.address,
        note=body.note,
        sales=body.sales,
        order_type=body.order_type,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    result = current_domain.process(command, asynchronous=False)
    return PlaceOrderResponse(**result)


@order_router.get("", response_model=OrderListResponse)
async def list_orders(
    search: str | None = None,
    x_sales: str | None = Header(default=None),
    staff: StaffSession = Depends(require_staff),
) -> OrderListResponse:
    book = OrderBook()
    orders = [_order_response(row, book.restore(row, items)) for row, items in book.list_orders(x_sales, search)]
    return OrderListResponse(orders=orders, count=len(orders))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    book = OrderBook()
    row = book.get_row(order_id)
    return _order_response(row, book.restore(row, book.item_rows(order_id)))


@order_router.put("/{order_id}", response_model=ReviseOrderResponse)
async def revise_order(order_id: str, body: ReviseOrderRequest) -> ReviseOrderResponse:
    command = ReviseOrder(
        order_id=order_id,
        name=body.name,
        whatsapp=body.whatsapp,
        address=body.address,
        note=body.note,
        sales=body.sales,
        order_type=body.order_type,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    result = current_domain.process(command, asynchronous=False)
    return ReviseOrderResponse(**result)


@order_router.patch("/{order_id}/spin", response_model=StatusResponse)
async def record_spin_fields(order_id: str, body: SpinFieldsRequest) -> StatusResponse:
    command = RecordSpinStatus(
        order_id=order_id,
        spins_used=body.spins_used,
        spin_completed=body.spin_completed,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/spin", response_model=SpinSessionResponse)
async def open_spin(order_id: str) -> SpinSessionResponse:
    result = current_domain.process(OpenSpin(order_id=order_id), asynchronous=False)
    return SpinSessionResponse(**result)


@order_router.post("/{order_id}/spin/draws", response_model=SpinDrawResponse)
async def draw_spin(order_id: str) -> SpinDrawResponse:
    result = current_domain.process(DrawSpin(order_id=order_id), asynchronous=False)
    return SpinDrawResponse(**result)


@order_router.post("/{order_id}/spin/close", response_model=SpinCloseResponse)
async def close_spin(order_id: str) -> SpinCloseResponse:
    result = current_domain.process(CloseSpin(order_id=order_id), asynchronous=False)
    return SpinCloseResponse(**result)


@order_router.post("/{order_id}/invoice", response_model=InvoiceResponse)
async def save_invoice(
    order_id: str,
    body: InvoiceRequest,
    staff: StaffSession = Depends(require_staff),
) -> InvoiceResponse:
    command = SaveInvoice(
        order_id=order_id,
        extra_items=json.dumps([item.model_dump() for item in body.extra_items]),
        discount_type=body.discount_type,
        discount_value=body.discount_value,
    )
    result = current_domain.process(command, asynchronous=False)
    return InvoiceResponse(**result)
