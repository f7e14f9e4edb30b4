from flask import request
from app.schemas.admin import (
    AddItemRequest,
    UpdatePriceRequest,
    UpdateOptionsRequest,
    UpdateDescriptionRequest,
)
from app.services import catalog
from app.services.errors import NotFoundError, ValidationError
from app.utils import ok, error, transactional, validate_schema, internal_error_response
from . import admin_bp


def _mutate(message, fn, *args):
    """Run a catalog mutation in its own transaction and render the item."""
    try:
        with transactional(message):
            item = fn(*args)
    except NotFoundError as e:
        return error(str(e), status=404)
    except ValidationError as e:
        return error(str(e), status=400)
    except Exception:
        return internal_error_response()
    return ok(item.to_dict())


@admin_bp.route("/items", methods=["GET"])
def list_items():
    return ok([item.to_dict() for item in catalog.list_items()])


@admin_bp.route("/items", methods=["POST"])
@validate_schema(AddItemRequest)
def add_item():
    data = request.validated_data
    try:
        with transactional("Failed to add item"):
            item = catalog.add_item(
                name=data.name,
                description=data.description,
                emoji=data.emoji,
                price=data.price,
                options=data.options,
            )
    except ValidationError as e:
        return error(str(e), status=400)
    except Exception:
        return internal_error_response()
    return ok(item.to_dict(), message="Item added", status=201)


@admin_bp.route("/items/<int:item_id>/stock", methods=["POST"])
def toggle_item_stock(item_id):
    return _mutate("Failed to toggle item stock", catalog.toggle_stock, item_id)


@admin_bp.route("/items/<int:item_id>/price", methods=["PUT"])
@validate_schema(UpdatePriceRequest)
def update_item_price(item_id):
    return _mutate("Failed to update price", catalog.update_price, item_id, request.validated_data.price)


@admin_bp.route("/items/<int:item_id>/options", methods=["PUT"])
@validate_schema(UpdateOptionsRequest)
def update_item_options(item_id):
    return _mutate("Failed to update options", catalog.update_options, item_id, request.validated_data.options)


@admin_bp.route("/items/<int:item_id>/description", methods=["PUT"])
@validate_schema(UpdateDescriptionRequest)
def update_item_description(item_id):
    return _mutate(
        "Failed to update description",
        catalog.update_description,
        item_id,
        request.validated_data.description,
    )


@admin_bp.route("/items/<int:item_id>", methods=["DELETE"])
def delete_item(item_id):
    try:
        with transactional("Failed to delete item"):
            catalog.delete_item(item_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    except Exception:
        return internal_error_response()
    return ok(message="Item deleted")
