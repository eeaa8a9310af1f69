# merchstore/errors.py


class StoreError(RuntimeError):
    """The order database failed or is unreachable."""


class OrderNotFound(LookupError):
    def __init__(self, order_code: str):
        super().__init__(f"no order with code {order_code}")
        self.order_code = order_code


class CheckoutError(Exception):
    """Raised by the checkout client when the server did not accept an order."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
