from decimal import Decimal
from typing import List, Optional, Union

from models import db
from models.item import MenuItem, DEFAULT_EMOJI
from app.services.cart import coerce_price
from app.services.errors import NotFoundError, ValidationError


def parse_options(raw: Union[str, List[str], None]) -> Optional[List[str]]:
    """Turn admin input (``"Small, Large"`` or a list) into a list or ``None``."""
    if raw is None:
        return None
    parts = raw.split(",") if isinstance(raw, str) else raw
    options = [str(o).strip() for o in parts if str(o).strip()]
    return options or None


def _price(value) -> Decimal:
    price = coerce_price(value)
    if price < 0:
        raise ValidationError("Price cannot be negative")
    return price


def list_items() -> List[MenuItem]:
    return MenuItem.query.order_by(MenuItem.created_at.asc(), MenuItem.id.asc()).all()


def get_item(item_id: int) -> MenuItem:
    item = db.session.get(MenuItem, item_id)
    if item is None:
        raise NotFoundError("Item not found")
    return item


def add_item(name: str, description: str = None, emoji: str = None, price=None, options=None) -> MenuItem:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Item name is required")
    item = MenuItem(
        name=name,
        description=(description or "").strip() or None,
        emoji=emoji or DEFAULT_EMOJI,
        price=_price(price),
        options=parse_options(options),
        in_stock=True,
    )
    db.session.add(item)
    return item


def toggle_stock(item_id: int) -> MenuItem:
    item = get_item(item_id)
    item.in_stock = not item.in_stock
    return item


def update_price(item_id: int, price) -> MenuItem:
    item = get_item(item_id)
    item.price = _price(price)
    return item


def update_options(item_id: int, options) -> MenuItem:
    item = get_item(item_id)
    item.options = parse_options(options)
    return item


def update_description(item_id: int, description: Optional[str]) -> MenuItem:
    item = get_item(item_id)
    item.description = (description or "").strip() or None
    return item


def delete_item(item_id: int) -> None:
    # Placed orders keep their own snapshot of the item
    db.session.delete(get_item(item_id))
