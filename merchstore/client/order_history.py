# merchstore/client/order_history.py
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from ..utils.result import Err, Ok, Result, parse_json

log = logging.getLogger(__name__)

HISTORY_STORAGE_KEY = "rotteck-pulli:order-history"
MAX_HISTORY_ENTRIES = 5
DISPLAY_FORMAT = "%d.%m.%Y, %H:%M:%S"


def parse_history(raw) -> Result[list[dict]]:
    parsed = parse_json(raw)
    if isinstance(parsed, Err):
        return parsed
    if not isinstance(parsed.value, list):
        return Err("order history is not a list")
    return Ok([e for e in parsed.value if isinstance(e, dict)])


class OrderHistoryCache:
    """The shopper's last few order codes, newest first.

    Only a shortcut for the status page; the server still checks the email
    for every code it is asked about.
    """

    def __init__(self, storage, capacity: int = MAX_HISTORY_ENTRIES):
        self.storage = storage
        self.capacity = capacity

    def load(self) -> list[dict]:
        try:
            raw = self.storage.get_item(HISTORY_STORAGE_KEY)
        except OSError as e:
            log.warning("could not read order history: %s", e)
            return []
        if not raw:
            return []
        parsed = parse_history(raw)
        if isinstance(parsed, Err):
            log.warning("could not read order history: %s", parsed.error)
            return []
        return parsed.value[: self.capacity]

    def persist(self, entries) -> None:
        try:
            self.storage.set_item(HISTORY_STORAGE_KEY, json.dumps(list(entries or []), ensure_ascii=False))
        except OSError as e:
            log.warning("could not save order history: %s", e)

    def add(self, order) -> list[dict]:
        if not isinstance(order, dict) or not order.get("orderCode"):
            return self.load()

        entry = {
            "orderCode": order["orderCode"],
            "email": order.get("email") or "",
            "createdAt": order.get("createdAt") or datetime.now(timezone.utc).isoformat(),
        }
        rest = [e for e in self.load() if e.get("orderCode") != entry["orderCode"]]
        updated = [entry, *rest][: self.capacity]
        self.persist(updated)
        return updated

    def clear(self) -> None:
        try:
            self.storage.remove_item(HISTORY_STORAGE_KEY)
        except OSError as e:
            log.warning("could not clear order history: %s", e)


def format_timestamp(value) -> str:
    """Local "DD.MM.YYYY, HH:MM:SS" for display; anything unparsable comes back as-is."""
    if not value:
        return ""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError:
            return value
    else:
        return value
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return dt.strftime(DISPLAY_FORMAT)
