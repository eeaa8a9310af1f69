# merchstore/order/routes.py
from flask import current_app

from ..errors import StoreError
from ..schemas import decode_payload, parse_order_request, parse_status_request
from ..services.checkout_service import create_order as create_order_row
from ..services.order_status_service import resolve_statuses
from ..store import current_store
from ..utils.api import err, ok, read_body
from ..utils.result import Err
from . import bp


@bp.post("/create-order")
def create_order():
    """
    Body: { "email": str, "items": [{ "color", "size", "quantity" }] }
    201 -> { "orderCode", "createdAt" }
    """
    payload = decode_payload(read_body())
    if isinstance(payload, Err):
        return err(payload.error, 400)

    parsed = parse_order_request(payload.value)
    if isinstance(parsed, Err):
        return err(parsed.error, 400)

    try:
        created = create_order_row(current_store(), parsed.value)
    except StoreError:
        current_app.logger.exception("create order: store write failed")
        return err("could not save order", 500)

    current_app.logger.info("order %s created with %d item(s)",
                            created["orderCode"], parsed.value.total_quantity)
    return ok(created, status=201)


@bp.post("/order-status")
def order_status():
    """
    Body: { "entries": [{ "orderCode", "email" }] }
    Each entry resolves to its own status: pending | paid | unknown | unauthorised.
    """
    # an unreadable body counts as "no entries", same as an empty list
    payload = decode_payload(read_body())
    parsed = parse_status_request(payload.value if not isinstance(payload, Err) else {})
    if isinstance(parsed, Err):
        return err(parsed.error, 400)

    try:
        results = resolve_statuses(current_store(), parsed.value)
    except StoreError:
        current_app.logger.exception("order status: store lookup failed")
        return err("could not load order information", 500)

    return ok({"results": results})
