# ------ merchstore/model/__init__.py ------

from .order import Order, ORDER_STATUSES

__all__ = [
    "Order",
    "ORDER_STATUSES",
]
