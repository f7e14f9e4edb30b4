from datetime import date
from flask import request
from app.services import orders as order_service
from app.services.errors import NotFoundError, ValidationError
from app.services.order_feed import current_board
from app.utils import ok, error, transactional, internal_error_response
from . import admin_bp


def _with_status(order: dict) -> dict:
    return dict(order, display_status=order_service.status_of(order).value)


@admin_bp.route("/orders", methods=["GET"])
def list_orders():
    status_filter = request.args.get("status", "all")
    date_string = request.args.get("date")
    orders = current_board().orders()
    try:
        orders = order_service.filter_orders(orders, status_filter)
        if date_string:
            orders = order_service.orders_for_date(orders, date_string)
    except ValidationError as e:
        return error(str(e), status=400)
    return ok({"orders": [_with_status(o) for o in orders], "count": len(orders)})


@admin_bp.route("/orders/calendar", methods=["GET"])
def order_calendar():
    today = date.today()
    year = request.args.get("year", default=today.year, type=int)
    month = request.args.get("month", default=today.month, type=int)
    try:
        orders = order_service.filter_orders(current_board().orders(), request.args.get("status", "all"))
        cells = order_service.order_calendar(year, month, orders)
    except ValidationError as e:
        return error(str(e), status=400)
    return ok({"year": year, "month": month, "cells": cells})


@admin_bp.route("/orders/<int:order_id>", methods=["GET"])
def get_order(order_id):
    try:
        order = order_service.get_order(order_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    return ok(_with_status(order.to_dict()))


def _toggle(message, fn, order_id):
    try:
        with transactional(message):
            order = fn(order_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    except Exception:
        return internal_error_response()
    return ok(_with_status(order.to_dict()))


@admin_bp.route("/orders/<int:order_id>/fulfilled", methods=["POST"])
def toggle_order_fulfilled(order_id):
    return _toggle("Failed to update order", order_service.toggle_fulfilled, order_id)


@admin_bp.route("/orders/<int:order_id>/paid", methods=["POST"])
def toggle_order_paid(order_id):
    return _toggle("Failed to update order", order_service.toggle_paid, order_id)


@admin_bp.route("/orders/<int:order_id>", methods=["DELETE"])
def delete_order(order_id):
    try:
        with transactional("Failed to delete order"):
            order_service.delete_order(order_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    except Exception:
        return internal_error_response()
    return ok(message="Order deleted")
