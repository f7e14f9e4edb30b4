from app.services import catalog
from app.utils import ok, error
from app.services.errors import NotFoundError
from . import storefront_bp


@storefront_bp.route("/menu", methods=["GET"])
def list_menu():
    return ok([item.to_dict() for item in catalog.list_items()])


@storefront_bp.route("/menu/<int:item_id>", methods=["GET"])
def get_menu_item(item_id):
    try:
        item = catalog.get_item(item_id)
    except NotFoundError as e:
        return error(str(e), status=404)
    return ok(item.to_dict())
