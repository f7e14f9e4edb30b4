from flask import request, session
from app.services import catalog
from app.services.errors import NotFoundError
from app.services.session_state import (
    AddToCart,
    ClearCart,
    RemoveLine,
    UpdateQuantity,
    load_state,
)
from app.schemas.storefront import AddToCartRequest, UpdateCartRequest, RemoveCartLineRequest
from app.utils import ok, error, validate_schema
from . import storefront_bp, apply_action


@storefront_bp.route("/cart", methods=["GET"])
def view_cart():
    return ok(load_state(session).cart.to_dict())


@storefront_bp.route("/cart/add", methods=["POST"])
@validate_schema(AddToCartRequest)
def add_to_cart():
    data = request.validated_data
    try:
        item = catalog.get_item(data.item_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    if not item.in_stock:
        return error("Item is out of stock", status=400)

    option = (data.selected_option or "").strip() or None
    if item.options:
        # Customers start with the first option preselected
        option = option or item.options[0]
        if option not in item.options:
            return error("Unknown option for this item", status=400)
    elif option:
        return error("This item has no options", status=400)

    state = apply_action(AddToCart(item=item, selected_option=option, quantity=data.quantity))
    return ok(state.cart.to_dict(), message="Item added")


@storefront_bp.route("/cart/update", methods=["POST"])
@validate_schema(UpdateCartRequest)
def update_cart():
    data = request.validated_data
    if load_state(session).cart.get(data.line_key) is None:
        return error("Item not in cart", status=404)
    state = apply_action(UpdateQuantity(key=data.line_key, quantity=data.quantity))
    return ok(state.cart.to_dict(), message="Cart updated")


@storefront_bp.route("/cart/remove", methods=["POST"])
@validate_schema(RemoveCartLineRequest)
def remove_from_cart():
    state = apply_action(RemoveLine(key=request.validated_data.line_key))
    return ok(state.cart.to_dict(), message="Item removed")


@storefront_bp.route("/cart/clear", methods=["POST"])
def clear_cart():
    state = apply_action(ClearCart())
    return ok(state.cart.to_dict(), message="Cart cleared")
