# merchstore/client/order_status.py
from __future__ import annotations

import logging
import threading

import requests

log = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def sanitise_entries(entries) -> list[dict]:
    if not isinstance(entries, (list, tuple)):
        return []
    out = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        code = entry.get("orderCode")
        email = entry.get("email")
        code = code.strip().upper() if isinstance(code, str) else ""
        email = email.strip() if isinstance(email, str) else ""
        if code and email:
            out.append({"orderCode": code, "email": email})
    return out


def normalise_result(result) -> dict:
    result = result if isinstance(result, dict) else {}
    status = result.get("status")
    items = result.get("items")
    return {
        "orderCode": result.get("orderCode") or "",
        "email": result.get("email") or "",
        "status": status if isinstance(status, str) else "pending",
        "items": items if isinstance(items, list) else [],
        "createdAt": result.get("createdAt"),
        "updatedAt": result.get("updatedAt"),
    }


class OrderStatusClient:
    """Looks up the shopper's cached orders on the server.

    Never raises: an unreachable server, a non-2xx answer or a cancelled
    lookup all come back as an empty list.
    """

    def __init__(self, base_url: str = "", session=None, timeout: float | None = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/api/order-status"

    def fetch_statuses(self, entries, cancel: threading.Event | None = None) -> list[dict]:
        sanitised = sanitise_entries(entries)
        if not sanitised:
            return []
        if cancel is not None and cancel.is_set():
            return []

        try:
            response = self.session.post(
                self.url,
                json={"entries": sanitised},
                headers=DEFAULT_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("could not load order status: %s", e)
            return []

        # superseded while in flight, drop the answer
        if cancel is not None and cancel.is_set():
            log.debug("order status lookup cancelled, discarding %s response", response.status_code)
            return []
        if not response.ok:
            return []

        try:
            payload = response.json()
        except ValueError as e:
            log.warning("order status response is not JSON: %s", e)
            return []

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            return []
        return [normalise_result(r) for r in results]
