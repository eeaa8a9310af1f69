# merchstore/admin/routes.py
from flask import current_app, request

from ..errors import OrderNotFound, StoreError
from ..schemas import decode_payload, parse_order_code_request
from ..services.admin_service import build_admin_summary, mark_order_paid
from ..store import current_store
from ..utils.api import err, ok, read_body
from ..utils.decorators import admin_required
from ..utils.money import parse_production_cost
from ..utils.result import Err
from . import bp


@bp.get("/admin-summary")
@admin_required
def admin_summary():
    """
    Query params:
      - productionCost=4,50  (per item, optional; defaults to 0)
    """
    production_cost = parse_production_cost(request.args.get("productionCost"))
    try:
        data = build_admin_summary(
            current_store(),
            unit_price=current_app.config["UNIT_SALE_PRICE"],
            production_cost=production_cost,
        )
    except StoreError:
        current_app.logger.exception("admin summary: store read failed")
        return err("could not load the summary", 500)
    return ok(data)


@bp.post("/mark-order-paid")
@admin_required
def mark_paid():
    """Body: { "orderCode": str }"""
    payload = decode_payload(read_body())
    if isinstance(payload, Err):
        return err(payload.error, 400)

    code = parse_order_code_request(payload.value)
    if isinstance(code, Err):
        return err(code.error, 400)

    try:
        data = mark_order_paid(current_store(), code.value)
    except OrderNotFound:
        return err("no order found with this code", 404)
    except StoreError:
        current_app.logger.exception("mark paid: store update failed for %s", code.value)
        return err("could not update the order", 500)

    current_app.logger.info("order %s marked as paid", code.value)
    return ok(data)
