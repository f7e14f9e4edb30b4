from sqlalchemy import Column, String, Text, Boolean, Date, DateTime, Numeric
from sqlalchemy.sql import func
from models import db, BIGINT

FULFILLMENT_TYPES = ("pickup", "gym", "delivery")


class Order(db.Model):
    __tablename__ = "orders"
    __table_args__ = (
        db.Index("ix_orders_requested_date", "requested_date"),
        db.Index("ix_orders_created_at", "created_at"),
    )
    id = Column(BIGINT, primary_key=True)
    customer_name = Column(String(120), nullable=False)
    customer_email = Column(String(255), nullable=False)
    requested_date = Column(Date, nullable=True)
    fulfillment_type = Column(String(20), nullable=False, default="pickup")  # pickup, gym, delivery
    delivery_address = Column(Text, nullable=True)
    # Frozen snapshot: [{id, name, emoji, selectedOption, quantity, price}]
    items = Column(db.JSON, nullable=False, default=list)
    total = Column(Numeric(10, 2), nullable=False, default=0)
    note = Column(Text, nullable=True)
    status = Column(String(20), default="pending")  # legacy, never updated
    is_fulfilled = Column(Boolean, nullable=False, default=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "requested_date": self.requested_date.isoformat() if self.requested_date else None,
            "fulfillment_type": self.fulfillment_type,
            "delivery_address": self.delivery_address,
            "items": list(self.items or []),
            "total": float(self.total or 0),
            "note": self.note,
            "status": self.status,
            "is_fulfilled": bool(self.is_fulfilled),
            "is_paid": bool(self.is_paid),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Order id={self.id} customer={self.customer_name}>"
