# merchstore/services/checkout_service.py
from ..schemas import OrderRequest
from ..store import OrderStore
from ..utils.api import iso, utc_now
from .order_code import generate_order_code


def create_order(store: OrderStore, request: OrderRequest, *, nonce: bytes | None = None) -> dict:
    """Insert a pending order. ``StoreError`` propagates; no code is handed
    out unless the row was written."""
    order_hash = generate_order_code(request.email, request.items, nonce=nonce)
    order = store.insert(order_hash=order_hash, email=request.email, items=request.items, status="pending")
    return {
        "orderCode": order.order_hash or order_hash,
        "createdAt": iso(order.created_at) or iso(utc_now()),
    }
