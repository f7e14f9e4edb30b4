# --- models/item.py ---
from models import db, BIGINT
from datetime import datetime

DEFAULT_EMOJI = "🍪"


class MenuItem(db.Model):
    __tablename__ = "items"

    id = db.Column(BIGINT, primary_key=True)

    # Core details
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    emoji = db.Column(db.String(16), nullable=False, default=DEFAULT_EMOJI)

    # Pricing
    price = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    # Choices offered to the customer, e.g. ["Chocolate chip", "Oatmeal"]
    options = db.Column(db.JSON, nullable=True)

    # Availability (boolean only, no stock counts)
    in_stock = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "emoji": self.emoji,
            "price": float(self.price or 0),
            "options": list(self.options) if self.options else None,
            "in_stock": bool(self.in_stock),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<MenuItem id={self.id} name={self.name}>"
