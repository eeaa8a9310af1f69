from datetime import datetime, timezone
from ..extensions import db
from ..utils.api import iso

ORDER_STATUSES = ("pending", "paid")

def _utcnow():
    return datetime.now(timezone.utc)

class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    order_hash = db.Column(db.String(64), unique=True, index=True, nullable=False)  # e.g. "3F9A0C21B7D4"
    email = db.Column(db.String(256), nullable=False)
    status = db.Column(db.String(20), default="pending", nullable=False, index=True)

    # [{product, color, size, quantity}]
    items = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def as_api(self):
        return {
            "order_hash": self.order_hash,
            "email": self.email,
            "status": self.status,
            "items": list(self.items or []),
            "created_at": iso(self.created_at),
            "updated_at": iso(self.updated_at),
        }

    def as_settled_api(self):
        return {
            "order_hash": self.order_hash,
            "status": self.status,
            "updated_at": iso(self.updated_at),
        }
