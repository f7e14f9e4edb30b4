import logging
from datetime import date
from flask import request, session, current_app
from flask_limiter.util import get_remote_address
from pydantic import ValidationError as SchemaError
from extensions import limiter
from app.metrics import ORDERS_SUBMITTED
from app.schemas.storefront import CheckoutRequest
from app.services.errors import ValidationError
from app.services.notifications import dispatch_order_emails
from app.services.orders import submit_order, email_payload
from app.services.session_state import (
    Navigate,
    OrderFailed,
    OrderPlaced,
    UpdateCheckout,
    load_state,
    reduce,
    save_state,
    state_to_dict,
)
from app.services.settings import get_admin_email, get_blocked_dates
from app.utils import ok, error, transactional, validate_schema, validation_error_response
from . import storefront_bp, apply_action

logger = logging.getLogger(__name__)

SUBMIT_FAILED_MESSAGE = "Failed to submit order. Please try again."


@storefront_bp.route("/session", methods=["GET"])
def view_session():
    return ok(state_to_dict(load_state(session)))


@storefront_bp.route("/session/view", methods=["POST"])
def change_view():
    view = (request.get_json(silent=True) or {}).get("view")
    try:
        state = apply_action(Navigate(view=view))
    except SchemaError as ve:
        return validation_error_response(ve.errors())
    return ok(state_to_dict(state))


@storefront_bp.route("/checkout", methods=["PUT"])
@validate_schema(CheckoutRequest)
def save_checkout():
    try:
        state = apply_action(UpdateCheckout(changes=request.validated_data.changes()))
    except SchemaError as ve:
        return validation_error_response(ve.errors())
    return ok(state_to_dict(state), message="Checkout saved")


@storefront_bp.route("/order/submit", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@validate_schema(CheckoutRequest)
def submit():
    state = load_state(session)
    try:
        state = reduce(state, UpdateCheckout(changes=request.validated_data.changes()))
    except SchemaError as ve:
        return validation_error_response(ve.errors())

    try:
        order = submit_order(state.cart, state.checkout, get_blocked_dates(), date.today())
    except ValidationError as e:
        save_state(session, state)
        return error(str(e), status=400)

    try:
        with transactional("Failed to submit order"):
            pass
    except Exception:
        # Keep the cart so the customer can try again
        save_state(session, reduce(state, OrderFailed(message=SUBMIT_FAILED_MESSAGE)))
        return error(SUBMIT_FAILED_MESSAGE, status=500)

    ORDERS_SUBMITTED.labels(order.fulfillment_type).inc()
    logger.info("Order %s submitted", order.id)
    placed = order.to_dict()
    state = reduce(state, OrderPlaced(order_id=order.id))
    save_state(session, state)

    dispatch_order_emails(email_payload(order), get_admin_email())
    return ok({"order": placed, "session": state_to_dict(state)}, message="Order placed", status=201)
