# merchstore/client/checkout.py
from __future__ import annotations

import logging
import math

import requests

from ..catalog import PRODUCT_NAME
from ..errors import CheckoutError
from .cart import MAX_STUDENT_NAME_LENGTH, CartStore
from .order_history import OrderHistoryCache
from .order_status import DEFAULT_HEADERS

log = logging.getLogger(__name__)

MAX_ITEMS_ALLOWED = 50
GENERIC_FAILURE = "could not save order"


def _quantity(value) -> int:
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return max(1, value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    if not math.isfinite(number):
        return 1
    return max(1, math.floor(number))


def sanitise_checkout_payload(email, items) -> dict:
    safe_items = []
    for item in list(items or [])[:MAX_ITEMS_ALLOWED]:
        item = item.as_dict() if hasattr(item, "as_dict") else (item or {})
        product, color, size = item.get("product"), item.get("color"), item.get("size")
        name = item.get("studentName")
        safe_items.append({
            "product": product if isinstance(product, str) else PRODUCT_NAME,
            "color": color if isinstance(color, str) else "",
            "size": size if isinstance(size, str) else "",
            "quantity": _quantity(item.get("quantity")),
            "studentName": name[:MAX_STUDENT_NAME_LENGTH] if isinstance(name, str) else "",
        })
    return {
        "email": email.strip() if isinstance(email, str) else "",
        "items": safe_items,
    }


def _error_message(response) -> str:
    if "application/json" not in (response.headers.get("content-type") or ""):
        return GENERIC_FAILURE
    try:
        body = response.json()
    except ValueError:
        return GENERIC_FAILURE
    if not isinstance(body, dict):
        return GENERIC_FAILURE
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str) and error:
        return error
    message = body.get("message")
    return message if isinstance(message, str) and message else GENERIC_FAILURE


class CheckoutClient:
    def __init__(self, base_url: str = "", session=None, timeout: float | None = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/api/create-order"

    def submit_order(self, email, items) -> dict:
        """POST the order; returns {"orderCode", "createdAt"} or raises CheckoutError."""
        payload = sanitise_checkout_payload(email, items)
        try:
            response = self.session.post(self.url, json=payload, headers=DEFAULT_HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            raise CheckoutError(f"order could not be sent: {e}") from e

        if not response.ok:
            raise CheckoutError(_error_message(response), status=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise CheckoutError(GENERIC_FAILURE, status=response.status_code) from e


def checkout_cart(cart: CartStore, history: OrderHistoryCache, client: CheckoutClient) -> dict:
    """
    Submit the cart under its customer email.
    On success the cart is emptied and the order goes to the front of the
    history; on failure both are left as they were.
    """
    if cart.count <= 0:
        raise CheckoutError("cart is empty")

    email = cart.customer_email
    result = client.submit_order(email, cart.items)
    order_code = result.get("orderCode") if isinstance(result, dict) else None
    if not order_code:
        raise CheckoutError(GENERIC_FAILURE)

    history.add({"orderCode": order_code, "email": email, "createdAt": result.get("createdAt")})
    cart.clear_cart()
    log.info("order %s placed", order_code)
    return result
