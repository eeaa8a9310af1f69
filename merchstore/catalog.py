# merchstore/catalog.py
from decimal import Decimal

PRODUCT_NAME = "Pulli"

COLOR_VARIANTS = [
    {"key": "rot", "label": "Rot"},
    {"key": "blau", "label": "Blau"},
    {"key": "schwarz", "label": "Schwarz"},
]

SIZE_OPTIONS = ["XS", "S", "M", "L", "XL", "XXL"]

PRICE_IN_EURO = Decimal("35.00")


def color_label(key: str) -> str:
    for variant in COLOR_VARIANTS:
        if variant["key"] == (key or "").lower():
            return variant["label"]
    return key
