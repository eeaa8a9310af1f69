# merchstore/services/order_status_service.py
from ..schemas import StatusEntry, normalise_email
from ..utils.api import iso


def _result(entry: StatusEntry, status: str, order=None) -> dict:
    return {
        "orderCode": entry.order_code,
        "email": entry.email,
        "status": status,
        "items": list(order.items or []) if order is not None else [],
        "createdAt": iso(order.created_at) if order is not None else None,
        "updatedAt": iso(order.updated_at) if order is not None else None,
    }


def resolve_entry(entry: StatusEntry, order) -> dict:
    if order is None:
        return _result(entry, "unknown")
    # the code alone is not enough, the submitting email has to match too
    if normalise_email(order.email) != normalise_email(entry.email):
        return _result(entry, "unauthorised")
    return _result(entry, order.status or "pending", order)


def resolve_statuses(store, entries: list[StatusEntry]) -> list[dict]:
    """One result per input entry, duplicates included, from a single batched lookup."""
    if not entries:
        return []
    unique_codes = list(dict.fromkeys(e.order_code for e in entries))
    rows = store.find_by_codes(unique_codes)
    by_code = {(row.order_hash or "").upper(): row for row in rows}
    return [resolve_entry(entry, by_code.get(entry.order_code)) for entry in entries]
