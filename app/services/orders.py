"""Order submission and the fulfilled/paid status flags."""
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from models import db
from models.order import Order, FULFILLMENT_TYPES
from app.services.availability import calendar_days, is_date_selectable, parse_date, tomorrow
from app.services.cart import Cart
from app.services.errors import NotFoundError, ValidationError


class OrderStatus(str, Enum):
    PENDING = "Pending"
    FULFILLED = "Fulfilled"
    PAID = "Paid"
    COMPLETE = "Complete"


STATUS_FILTERS = ("all", "pending", "fulfilled", "paid", "complete")


def composite_status(is_fulfilled: bool, is_paid: bool) -> OrderStatus:
    if is_fulfilled and is_paid:
        return OrderStatus.COMPLETE
    if is_fulfilled:
        return OrderStatus.FULFILLED
    if is_paid:
        return OrderStatus.PAID
    return OrderStatus.PENDING


def _field(order, name):
    # Orders arrive as models or as the dicts cached by the order board
    if isinstance(order, dict):
        return order.get(name)
    return getattr(order, name)


def status_of(order) -> OrderStatus:
    return composite_status(bool(_field(order, "is_fulfilled")), bool(_field(order, "is_paid")))


def requested_date_of(order):
    value = _field(order, "requested_date")
    return parse_date(value) if isinstance(value, str) else value


def matches_filter(order, status_filter: str) -> bool:
    if status_filter == "all":
        return True
    return status_of(order).value.lower() == status_filter


def filter_orders(orders: Iterable, status_filter: str = "all") -> list:
    status_filter = (status_filter or "all").lower()
    if status_filter not in STATUS_FILTERS:
        raise ValidationError(f"Unknown status filter: {status_filter}")
    return [o for o in orders if matches_filter(o, status_filter)]


def orders_for_date(orders: Iterable, date_string: str) -> list:
    day = parse_date(date_string)
    return [o for o in orders if requested_date_of(o) == day]


def order_calendar(year: int, month: int, orders: Iterable):
    """Month grid of orders keyed by requested date."""
    by_day = {}
    for order in orders:
        day = requested_date_of(order)
        if day is not None:
            by_day.setdefault(day, []).append(order)
    cells = []
    for day in calendar_days(year, month):
        if day is None:
            cells.append(None)
            continue
        day_orders = by_day.get(day, [])
        cells.append({
            "date": day.isoformat(),
            "count": len(day_orders),
            "orders": [
                {"id": _field(o, "id"), "customer_name": _field(o, "customer_name"), "status": status_of(o).value}
                for o in day_orders
            ],
        })
    return cells


# --- persistence ---

def list_orders() -> List[Order]:
    return Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()


def get_order(order_id: int) -> Order:
    order = db.session.get(Order, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


def toggle_fulfilled(order_id: int) -> Order:
    order = get_order(order_id)
    order.is_fulfilled = not order.is_fulfilled
    return order


def toggle_paid(order_id: int) -> Order:
    order = get_order(order_id)
    order.is_paid = not order.is_paid
    return order


def delete_order(order_id: int) -> None:
    db.session.delete(get_order(order_id))


def submit_order(cart: Cart, checkout, blocked_dates: Iterable[str] = (), today: Optional[date] = None) -> Order:
    """Build an Order from the session cart and checkout form and add it to the session.

    Raises ValidationError before touching the database when the customer
    name, email or cart is missing, the requested date is not available, or a
    delivery has no address. The caller commits.
    """
    name = (checkout.customer_name or "").strip()
    email = (checkout.customer_email or "").strip()
    if not name:
        raise ValidationError("Name is required")
    if not email:
        raise ValidationError("Email is required")
    if cart.is_empty():
        raise ValidationError("Cart is empty")

    fulfillment_type = checkout.fulfillment_type or "pickup"
    if fulfillment_type not in FULFILLMENT_TYPES:
        raise ValidationError(f"Unknown fulfillment type: {fulfillment_type}")

    address = None
    if fulfillment_type == "delivery":
        address = (checkout.delivery_address or "").strip()
        if not address:
            raise ValidationError("Delivery address is required for delivery")

    requested = parse_date(checkout.requested_date)
    if requested is not None and not is_date_selectable(requested, blocked_dates, today):
        if requested < tomorrow(today):
            raise ValidationError("Requested date must be tomorrow or later")
        raise ValidationError("Requested date is not available")

    order = Order(
        customer_name=name,
        customer_email=email,
        requested_date=requested,
        fulfillment_type=fulfillment_type,
        delivery_address=address,
        items=cart.snapshot(),
        total=cart.total(),
        note=(checkout.note or "").strip() or None,
        status="pending",
        is_fulfilled=False,
        is_paid=False,
    )
    db.session.add(order)
    return order


def email_payload(order: Order) -> dict:
    """The JSON shape the notification templates and the send-email endpoint accept."""
    return {
        "id": order.id,
        "customer_name": order.customer_name,
        "customer_email": order.customer_email,
        "requested_date": order.requested_date.isoformat() if order.requested_date else None,
        "fulfillment_type": order.fulfillment_type,
        "delivery_address": order.delivery_address,
        "items": list(order.items or []),
        "total": float(order.total or 0),
        "note": order.note,
    }
