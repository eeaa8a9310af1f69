# merchstore/utils/money.py

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

Money = Decimal

def D(x) -> Money:
    return x if isinstance(x, Decimal) else Decimal(str(x or "0"))

def round_money(x: Money) -> Money:
    return D(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

def to_float_money(x) -> float:
    return float(round_money(x))

def parse_production_cost(raw) -> Money:
    """Lenient admin input: accepts "4,50" as well as 4.5; negative or junk is 0."""
    try:
        value = D(str(raw if raw is not None else "").strip().replace(",", "."))
    except (InvalidOperation, ValueError):
        return D(0)
    if not value.is_finite() or value < 0:
        return D(0)
    return value
