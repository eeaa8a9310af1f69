# merchstore/services/admin_service.py
from __future__ import annotations

from datetime import datetime, timezone

from ..errors import OrderNotFound
from ..schemas import parse_int
from ..store import OrderStore
from ..utils.api import iso, utc_now
from ..utils.money import D, Money, round_money, to_float_money

UNKNOWN_KEY = "unknown"


def _key(value) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def _item_quantity(item) -> int:
    if not isinstance(item, dict):
        return 0
    q = parse_int(item.get("quantity"))
    return max(0, q) if q is not None else 0


def _order_items(order) -> list:
    items = order.get("items")
    return items if isinstance(items, list) else []


def _order_quantity(order) -> int:
    return sum(_item_quantity(it) for it in _order_items(order))


def _is_paid(order) -> bool:
    return _key(order.get("status")) == "paid"


def aggregate_orders(orders) -> dict:
    """
    Fold the full order list into dashboard counts.
    Keys are lower-cased and trimmed; blank keys count as "unknown".
    Item lines with a quantity <= 0 are ignored.
    """
    totals = {
        "totalOrders": 0,
        "statusCounts": {},
        "itemsByColor": {},
        "itemsBySize": {},
        "itemsByVariant": {},
    }

    for order in orders:
        totals["totalOrders"] += 1
        status = _key(order.get("status")) or UNKNOWN_KEY
        totals["statusCounts"][status] = totals["statusCounts"].get(status, 0) + 1

        for item in _order_items(order):
            quantity = _item_quantity(item)
            if quantity <= 0:
                continue
            color = _key(item.get("color")) or UNKNOWN_KEY
            size = _key(item.get("size")) or UNKNOWN_KEY
            variant = f"{color}__{size}"

            for bucket, k in (("itemsByColor", color), ("itemsBySize", size), ("itemsByVariant", variant)):
                totals[bucket][k] = totals[bucket].get(k, 0) + quantity

    return totals


def _parse_created_at(value) -> datetime | None:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value:
        try:
            dt = datetime.fromisoformat(value)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def orders_per_day(orders) -> list[dict]:
    days: dict[str, dict] = {}
    for order in orders:
        created = _parse_created_at(order.get("created_at"))
        if created is None:
            continue
        key = created.date().isoformat()
        entry = days.setdefault(key, {"date": key, "total": 0, "paid": 0, "unpaid": 0})
        entry["total"] += 1
        entry["paid" if _is_paid(order) else "unpaid"] += 1
    return [days[k] for k in sorted(days)]


def compute_financials(orders, unit_price: Money, production_cost: Money) -> dict:
    unit_price = D(unit_price)
    production_cost = D(production_cost)
    margin = unit_price - production_cost

    counts = {"paidOrders": 0, "unpaidOrders": 0, "paidItems": 0, "unpaidItems": 0}
    revenue = {"paid": D(0), "unpaid": D(0)}
    profit = {"paid": D(0), "unpaid": D(0)}

    for order in orders:
        bucket = "paid" if _is_paid(order) else "unpaid"
        quantity = _order_quantity(order)
        counts[f"{bucket}Orders"] += 1
        counts[f"{bucket}Items"] += quantity
        revenue[bucket] += unit_price * quantity
        profit[bucket] += margin * quantity

    return {
        "totalOrders": counts["paidOrders"] + counts["unpaidOrders"],
        **counts,
        "totalItems": counts["paidItems"] + counts["unpaidItems"],
        "paidRevenue": to_float_money(revenue["paid"]),
        "unpaidRevenue": to_float_money(revenue["unpaid"]),
        "totalRevenue": to_float_money(revenue["paid"] + revenue["unpaid"]),
        "paidProfit": to_float_money(profit["paid"]),
        "unpaidProfit": to_float_money(profit["unpaid"]),
        "totalProfit": to_float_money(profit["paid"] + profit["unpaid"]),
        "unitPrice": to_float_money(unit_price),
        "productionCost": to_float_money(production_cost),
        "marginPerItem": to_float_money(round_money(margin)),
    }


def build_admin_summary(store: OrderStore, *, unit_price: Money, production_cost: Money) -> dict:
    orders = [o.as_api() for o in store.all_orders()]
    return {
        "summary": aggregate_orders(orders),
        "orders": orders,
        "ordersPerDay": orders_per_day(orders),
        "financials": compute_financials(orders, unit_price, production_cost),
        "generatedAt": iso(utc_now()),
    }


def mark_order_paid(store: OrderStore, order_code: str) -> dict:
    """pending -> paid. Already-paid orders are accepted again; unknown codes raise."""
    order = store.mark_paid(order_code)
    if order is None:
        raise OrderNotFound(order_code)
    updated_at = iso(order.updated_at) or iso(utc_now())
    return {"order": order.as_settled_api(), "updatedAt": updated_at}
