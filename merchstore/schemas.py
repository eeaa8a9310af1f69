# merchstore/schemas.py
"""Request parsing for the JSON endpoints.

Every handler runs its body through one of the ``parse_*`` functions and
gets back ``Ok(value)`` or ``Err(message)``; nothing here raises on bad
input.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass

from .catalog import PRODUCT_NAME
from .utils.result import Err, Ok, Result, parse_json

MAX_ITEMS = 50
MAX_COLOR_LENGTH = 48
MAX_SIZE_LENGTH = 24
MIN_QUANTITY = 1
MAX_QUANTITY = 30
MAX_ORDER_CODE_LENGTH = 64

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class OrderRequest:
    email: str
    items: list[dict]

    @property
    def total_quantity(self) -> int:
        return sum(item["quantity"] for item in self.items)


@dataclass(frozen=True)
class StatusEntry:
    order_code: str
    email: str


# ---- primitives ------------------------------------------------------------

def parse_int(value) -> int | None:
    """Leading-integer parse: 3, 3.9, "3", "3 pcs" all give 3; junk gives None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        return int(m.group(1)) if m else None
    return None


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))


def normalise_email(value) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def normalise_order_code(value) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().upper()[:MAX_ORDER_CODE_LENGTH]


def decode_payload(raw) -> Result[dict]:
    """Accepts a decoded JSON object or a JSON string holding one."""
    if raw is None:
        return Ok({})
    if isinstance(raw, (str, bytes)):
        if not raw.strip():
            return Ok({})
        parsed = parse_json(raw)
        if isinstance(parsed, Err):
            return Err("could not read JSON")
        raw = parsed.value
    if not isinstance(raw, dict):
        return Err("could not read JSON")
    return Ok(raw)


# ---- create order ----------------------------------------------------------

def sanitise_item(raw) -> dict | None:
    if not isinstance(raw, dict):
        return None
    color = raw.get("color")
    size = raw.get("size")
    color = color.strip()[:MAX_COLOR_LENGTH] if isinstance(color, str) else ""
    size = size.strip()[:MAX_SIZE_LENGTH] if isinstance(size, str) else ""
    if not color or not size:
        return None

    quantity = parse_int(raw.get("quantity"))
    quantity = MIN_QUANTITY if quantity is None else min(MAX_QUANTITY, max(MIN_QUANTITY, quantity))

    return {
        "product": PRODUCT_NAME,
        "color": color,
        "size": size,
        "quantity": quantity,
    }


def parse_order_request(payload: dict) -> Result[OrderRequest]:
    email = payload.get("email")
    email = email.strip() if isinstance(email, str) else ""
    if not is_valid_email(email):
        return Err("invalid email")

    raw_items = payload.get("items")
    raw_items = raw_items if isinstance(raw_items, list) else []
    items = [it for it in (sanitise_item(r) for r in raw_items[:MAX_ITEMS]) if it]
    if not items:
        return Err("no valid products")

    request = OrderRequest(email=email, items=items)
    # unreachable while quantities clamp to >= 1, kept as a hard guard
    if request.total_quantity <= 0:
        return Err("quantity must be positive")
    return Ok(request)


# ---- order status ----------------------------------------------------------

def sanitise_status_entry(raw) -> StatusEntry | None:
    if not isinstance(raw, dict):
        return None
    code = raw.get("orderCode", raw.get("order_hash"))
    email = raw.get("email", raw.get("customerEmail"))
    order_code = normalise_order_code(code)
    email = email.strip() if isinstance(email, str) else ""
    if not order_code or not email:
        return None
    return StatusEntry(order_code=order_code, email=email)


def parse_status_entries(raw_entries) -> list[StatusEntry]:
    if not isinstance(raw_entries, list):
        return []
    return [e for e in (sanitise_status_entry(r) for r in raw_entries) if e]


def parse_status_request(payload: dict) -> Result[list[StatusEntry]]:
    entries = parse_status_entries(payload.get("entries"))
    if not entries:
        return Err("no valid entries")
    return Ok(entries)


# ---- mark paid -------------------------------------------------------------

def parse_order_code_request(payload: dict) -> Result[str]:
    code = normalise_order_code(payload.get("orderCode", payload.get("order_hash")))
    if not code:
        return Err("invalid order code")
    return Ok(code)
