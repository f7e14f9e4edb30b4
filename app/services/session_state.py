"""Per-session storefront state and the transitions customer actions trigger.

The whole state of one browsing session is a single immutable value.
``reduce(state, action)`` returns the next state and never mutates its input,
so every route reads the state from the session, reduces, and writes it back.
"""
import logging
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from app.services.cart import Cart

logger = logging.getLogger(__name__)

SESSION_KEY = "storefront"

View = Literal["menu", "cart", "confirmation"]


class CheckoutForm(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_name: str = ""
    customer_email: str = ""
    requested_date: Optional[str] = None
    fulfillment_type: Literal["pickup", "gym", "delivery"] = "pickup"
    delivery_address: str = ""
    note: str = ""


class StorefrontState(BaseModel):
    model_config = ConfigDict(frozen=True)

    view: View = "menu"
    cart: Cart = Cart()
    checkout: CheckoutForm = CheckoutForm()
    last_order_id: Optional[int] = None
    error: Optional[str] = None


# --- actions ---

class AddToCart(BaseModel):
    item: Any
    selected_option: Optional[str] = None
    quantity: int = 1


class UpdateQuantity(BaseModel):
    key: str
    quantity: int


class RemoveLine(BaseModel):
    key: str


class ClearCart(BaseModel):
    pass


class Navigate(BaseModel):
    view: View


class UpdateCheckout(BaseModel):
    changes: dict


class OrderPlaced(BaseModel):
    order_id: int


class OrderFailed(BaseModel):
    message: str


Action = Union[
    AddToCart, UpdateQuantity, RemoveLine, ClearCart, Navigate,
    UpdateCheckout, OrderPlaced, OrderFailed,
]


def reduce(state: StorefrontState, action: Action) -> StorefrontState:
    if isinstance(action, AddToCart):
        return state.model_copy(update={
            "cart": state.cart.add(action.item, action.selected_option, action.quantity),
            "error": None,
        })
    if isinstance(action, UpdateQuantity):
        return state.model_copy(update={"cart": state.cart.update_quantity(action.key, action.quantity)})
    if isinstance(action, RemoveLine):
        return state.model_copy(update={"cart": state.cart.remove(action.key)})
    if isinstance(action, ClearCart):
        return state.model_copy(update={"cart": Cart()})
    if isinstance(action, Navigate):
        return state.model_copy(update={"view": action.view, "error": None})
    if isinstance(action, UpdateCheckout):
        # Validate the merged draft so a bad field never lands in the session
        merged = dict(state.checkout.model_dump(), **action.changes)
        return state.model_copy(update={"checkout": CheckoutForm(**merged)})
    if isinstance(action, OrderPlaced):
        return StorefrontState(view="confirmation", last_order_id=action.order_id)
    if isinstance(action, OrderFailed):
        return state.model_copy(update={"error": action.message})
    raise TypeError(f"Unknown storefront action: {type(action).__name__}")


def load_state(session) -> StorefrontState:
    raw = session.get(SESSION_KEY)
    if not raw:
        return StorefrontState()
    try:
        return StorefrontState.model_validate(raw)
    except ValidationError:
        logger.warning("Discarding unreadable storefront session state")
        return StorefrontState()


def save_state(session, state: StorefrontState) -> None:
    session[SESSION_KEY] = state.model_dump(mode="json")


def state_to_dict(state: StorefrontState) -> dict:
    return {
        "view": state.view,
        "cart": state.cart.to_dict(),
        "checkout": state.checkout.model_dump(),
        "last_order_id": state.last_order_id,
        "error": state.error,
    }
