# merchstore/client/cart.py
from __future__ import annotations

import json
import logging
import math
import time
import uuid
from dataclasses import dataclass, field, replace

from ..utils.result import Err, Ok, Result, parse_json

log = logging.getLogger(__name__)

CART_STORAGE_KEY = "rotteck-pulli-cart"
STORAGE_VERSION = 2
MAX_STUDENT_NAME_LENGTH = 140
MAX_EMAIL_LENGTH = 256


def generate_id() -> str:
    return str(uuid.uuid4())


@dataclass
class CartItem:
    color: str
    size: str
    quantity: int = 1
    student_name: str = ""
    id: str = field(default_factory=generate_id)

    def as_dict(self):
        return {
            "id": self.id,
            "color": self.color,
            "size": self.size,
            "quantity": self.quantity,
            "studentName": self.student_name,
        }


@dataclass
class CartState:
    items: list[CartItem] = field(default_factory=list)
    customer_email: str = ""


def _to_number(value) -> int | float | None:
    if isinstance(value, bool) or value is None:
        return None
    # ints stay exact, float() overflows past ~1e308
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip() or "0")
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _stored_quantity(value) -> int:
    number = _to_number(1 if value is None else value)
    if number is None or number <= 0:
        return 1
    return max(1, math.floor(number))


def normalise_stored_items(raw_items) -> list[CartItem]:
    """Drop entries without color/size and fold duplicates of a (color, size)
    pair into one line, summing quantities and keeping the first non-empty
    student name."""
    if not isinstance(raw_items, list):
        return []

    merged: dict[tuple[str, str], CartItem] = {}
    for entry in raw_items:
        if not isinstance(entry, dict):
            continue
        color = entry.get("color") or entry.get("variant") or entry.get("colour")
        size = entry.get("size") or entry.get("variantSize")
        if not isinstance(color, str) or not isinstance(size, str) or not color or not size:
            continue

        quantity = _stored_quantity(entry.get("quantity"))
        name = entry.get("studentName")
        name = name[:MAX_STUDENT_NAME_LENGTH] if isinstance(name, str) else ""

        key = (color, size)
        current = merged.get(key)
        if current is None:
            merged[key] = CartItem(
                id=entry["id"] if isinstance(entry.get("id"), str) and entry["id"] else generate_id(),
                color=color,
                size=size,
                quantity=quantity,
                student_name=name,
            )
        else:
            current.quantity += quantity
            if not current.student_name and name:
                current.student_name = name

    return list(merged.values())


def parse_cart_state(raw) -> Result[CartState]:
    parsed = parse_json(raw)
    if isinstance(parsed, Err):
        return parsed
    data = parsed.value
    # v1 stored a bare list of items
    if isinstance(data, list):
        return Ok(CartState(items=normalise_stored_items(data)))
    if isinstance(data, dict):
        items = data.get("items")
        if items is None:
            items = data.get("products", [])
        email = data.get("customerEmail")
        return Ok(CartState(
            items=normalise_stored_items(items),
            customer_email=email[:MAX_EMAIL_LENGTH] if isinstance(email, str) else "",
        ))
    return Err(f"unexpected cart payload of type {type(data).__name__}")


def read_stored_state(storage) -> CartState:
    try:
        raw = storage.get_item(CART_STORAGE_KEY)
    except OSError as e:
        log.warning("could not read stored cart: %s", e)
        return CartState()
    if not raw:
        return CartState()

    parsed = parse_cart_state(raw)
    if isinstance(parsed, Err):
        log.warning("could not read stored cart: %s", parsed.error)
        return CartState()
    return parsed.value


class CartStore:
    """Client cart, one line per (color, size), written through to storage on every change."""

    def __init__(self, storage):
        self.storage = storage
        state = read_stored_state(storage)
        self._items: list[CartItem] = state.items
        self._customer_email: str = state.customer_email

    @property
    def items(self) -> list[CartItem]:
        return [replace(item) for item in self._items]

    @property
    def customer_email(self) -> str:
        return self._customer_email

    @property
    def count(self) -> int:
        return sum(item.quantity for item in self._items)

    def find(self, item_id: str) -> CartItem | None:
        return next((replace(i) for i in self._items if i.id == item_id), None)

    def add_item(self, color: str, size: str) -> CartItem | None:
        if not color or not size:
            return None
        item = next((i for i in self._items if i.color == color and i.size == size), None)
        if item:
            item.quantity += 1
        else:
            item = CartItem(color=color, size=size)
            self._items.append(item)
        self._persist()
        return replace(item)

    def update_quantity(self, item_id: str, quantity) -> None:
        number = _to_number(quantity)
        quantity = max(0, math.floor(number)) if number is not None else 0
        for item in self._items:
            if item.id == item_id:
                item.quantity = quantity
        self._items = [i for i in self._items if i.quantity > 0]
        self._persist()

    def update_student_name(self, item_id: str, name) -> None:
        name = name[:MAX_STUDENT_NAME_LENGTH] if isinstance(name, str) else ""
        for item in self._items:
            if item.id == item_id:
                item.student_name = name
        self._persist()

    def clear_cart(self) -> None:
        self._items = []
        self._persist()

    def update_customer_email(self, value) -> str:
        self._customer_email = value.strip()[:MAX_EMAIL_LENGTH] if isinstance(value, str) else ""
        self._persist()
        return self._customer_email

    def _persist(self) -> None:
        payload = {
            "items": [i.as_dict() for i in self._items],
            "customerEmail": self._customer_email,
            "version": STORAGE_VERSION,
            "updatedAt": int(time.time() * 1000),
        }
        try:
            self.storage.set_item(CART_STORAGE_KEY, json.dumps(payload, ensure_ascii=False))
        except OSError as e:
            log.warning("could not save cart: %s", e)
