from .cart import CartItem, CartStore
from .checkout import CheckoutClient, checkout_cart
from .order_history import OrderHistoryCache, format_timestamp
from .order_status import OrderStatusClient
from .storage import JsonFileStorage, MemoryStorage

__all__ = [
    "CartItem",
    "CartStore",
    "CheckoutClient",
    "checkout_cart",
    "OrderHistoryCache",
    "format_timestamp",
    "OrderStatusClient",
    "JsonFileStorage",
    "MemoryStorage",
]
