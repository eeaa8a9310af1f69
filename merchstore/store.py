# merchstore/store.py
from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from .errors import StoreError
from .model import ORDER_STATUSES, Order
from .utils.api import utc_now


class OrderStore:
    """Row-level access to the orders table.

    Built once by the app factory around the Flask-SQLAlchemy session and
    handed to the services, which never touch ``db`` themselves. Every
    method is a single round trip; database failures are rolled back and
    re-raised as ``StoreError``.
    """

    def __init__(self, session):
        self.session = session

    def _fail(self, action: str, e: Exception):
        self.session.rollback()
        raise StoreError(f"{action} failed") from e

    def insert(self, *, order_hash: str, email: str, items: list[dict], status: str = "pending") -> Order:
        if status not in ORDER_STATUSES:
            raise ValueError(f"unknown order status {status!r}")
        order = Order(order_hash=order_hash, email=email, items=items, status=status)
        try:
            self.session.add(order)
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("insert order", e)
        return order

    def find_by_codes(self, codes) -> list[Order]:
        codes = list(codes)
        if not codes:
            return []
        try:
            return self.session.query(Order).filter(Order.order_hash.in_(codes)).all()
        except SQLAlchemyError as e:
            self._fail("select orders", e)

    def all_orders(self) -> list[Order]:
        try:
            return self.session.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).all()
        except SQLAlchemyError as e:
            self._fail("list orders", e)

    def mark_paid(self, order_hash: str) -> Order | None:
        """Returns None when no row carries ``order_hash``; nothing is written then."""
        try:
            order = self.session.query(Order).filter(Order.order_hash == order_hash).one_or_none()
            if order is None:
                return None
            order.status = "paid"
            # set explicitly, re-marking a paid row changes no column otherwise
            order.updated_at = utc_now()
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("update order", e)
        return order


def current_store() -> OrderStore:
    return current_app.extensions["order_store"]
