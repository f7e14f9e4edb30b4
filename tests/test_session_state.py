from collections import namedtuple

import pytest
from pydantic import ValidationError

from app.services.session_state import (
    AddToCart,
    ClearCart,
    Navigate,
    OrderFailed,
    OrderPlaced,
    RemoveLine,
    StorefrontState,
    UpdateCheckout,
    UpdateQuantity,
    load_state,
    reduce,
    save_state,
)

Item = namedtuple("Item", ["id", "name", "emoji", "price"])
COOKIE = Item(1, "Cookie", "🍪", "3.50")


def test_reduce_returns_new_state():
    state = StorefrontState()
    after = reduce(state, AddToCart(item=COOKIE, quantity=2))
    assert state.cart.is_empty()
    assert after.cart.lines[0].quantity == 2


def test_cart_actions():
    state = reduce(StorefrontState(), AddToCart(item=COOKIE))
    state = reduce(state, UpdateQuantity(key="1-default", quantity=4))
    assert state.cart.item_count() == 4
    state = reduce(state, RemoveLine(key="1-default"))
    assert state.cart.is_empty()
    state = reduce(reduce(state, AddToCart(item=COOKIE)), ClearCart())
    assert state.cart.is_empty()


def test_checkout_updates_merge_into_draft():
    state = reduce(StorefrontState(), UpdateCheckout(changes={"customer_name": "Theresa"}))
    state = reduce(state, UpdateCheckout(changes={"fulfillment_type": "gym"}))
    assert state.checkout.customer_name == "Theresa"
    assert state.checkout.fulfillment_type == "gym"


def test_checkout_rejects_unknown_fulfillment():
    with pytest.raises(ValidationError):
        reduce(StorefrontState(), UpdateCheckout(changes={"fulfillment_type": "drone"}))


def test_order_placed_resets_cart_and_form():
    state = reduce(StorefrontState(), AddToCart(item=COOKIE))
    state = reduce(state, UpdateCheckout(changes={"customer_name": "T", "note": "hi"}))
    state = reduce(state, OrderPlaced(order_id=9))
    assert state.view == "confirmation"
    assert state.cart.is_empty()
    assert state.checkout.customer_name == ""
    assert state.last_order_id == 9


def test_order_failed_keeps_cart_and_sets_error():
    state = reduce(StorefrontState(), AddToCart(item=COOKIE))
    state = reduce(state, OrderFailed(message="nope"))
    assert state.error == "nope"
    assert not state.cart.is_empty()
    assert reduce(state, Navigate(view="cart")).error is None


def test_unknown_action_raises():
    with pytest.raises(TypeError):
        reduce(StorefrontState(), object())


def test_session_round_trip():
    session = {}
    state = reduce(StorefrontState(), AddToCart(item=COOKIE, selected_option="Choc"))
    save_state(session, state)
    assert load_state(session) == state
    assert load_state({}) == StorefrontState()
    assert load_state({"storefront": {"view": "nowhere"}}) == StorefrontState()
