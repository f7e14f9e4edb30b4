"""Session cart: an immutable collection of menu-item snapshots.

Lines are keyed by ``(item id, selected option)``. Adding an item that is
already in the cart with the same option bumps the quantity of the existing
line instead of appending a new one.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OPTION_KEY = "default"


def line_key(item_id, selected_option: Optional[str] = None) -> str:
    return f"{item_id}-{selected_option or DEFAULT_OPTION_KEY}"


def coerce_price(value: Any) -> Decimal:
    """Return ``value`` as a Decimal, or 0 when it is missing or not a number."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not price.is_finite():
        return Decimal("0")
    return price


class CartLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: int
    name: str
    emoji: Optional[str] = None
    price: Any = None
    selected_option: Optional[str] = None
    quantity: int = Field(default=1, ge=1)

    @property
    def key(self) -> str:
        return line_key(self.item_id, self.selected_option)

    @property
    def line_total(self) -> Decimal:
        return coerce_price(self.price) * self.quantity

    def snapshot(self) -> dict:
        return {
            "id": self.item_id,
            "name": self.name,
            "emoji": self.emoji,
            "selectedOption": self.selected_option,
            "quantity": self.quantity,
            "price": float(coerce_price(self.price)),
        }


class Cart(BaseModel):
    model_config = ConfigDict(frozen=True)

    lines: Tuple[CartLine, ...] = ()

    @classmethod
    def from_session(cls, data) -> "Cart":
        if not data:
            return cls()
        return cls.model_validate({"lines": data})

    def to_session(self) -> List[dict]:
        return [line.model_dump(mode="json") for line in self.lines]

    def get(self, key: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.key == key), None)

    def add(self, item, selected_option: Optional[str] = None, quantity: int = 1) -> "Cart":
        """Add ``quantity`` of ``item`` (a MenuItem or anything with the same fields)."""
        selected_option = selected_option or None
        key = line_key(item.id, selected_option)
        if self.get(key) is not None:
            return Cart(lines=tuple(
                line.model_copy(update={"quantity": line.quantity + quantity})
                if line.key == key else line
                for line in self.lines
            ))
        new_line = CartLine(
            item_id=item.id,
            name=item.name,
            emoji=getattr(item, "emoji", None),
            price=_price_of(item),
            selected_option=selected_option,
            quantity=quantity,
        )
        return Cart(lines=self.lines + (new_line,))

    def update_quantity(self, key: str, new_quantity: int) -> "Cart":
        if new_quantity <= 0:
            return self.remove(key)
        return Cart(lines=tuple(
            line.model_copy(update={"quantity": new_quantity}) if line.key == key else line
            for line in self.lines
        ))

    def remove(self, key: str) -> "Cart":
        return Cart(lines=tuple(line for line in self.lines if line.key != key))

    def total(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))

    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def snapshot(self) -> List[dict]:
        return [line.snapshot() for line in self.lines]

    def to_dict(self) -> dict:
        return {
            "lines": [
                dict(line.snapshot(), key=line.key, line_total=float(line.line_total))
                for line in self.lines
            ],
            "item_count": self.item_count(),
            "total": float(self.total()),
        }


def _price_of(item):
    price = getattr(item, "price", None)
    if isinstance(price, Decimal):
        return str(price)
    return price
