from flask import Blueprint, request
from app.version import API_PREFIX
from app.utils import admin_required

admin_bp = Blueprint("admin", __name__, url_prefix=f"{API_PREFIX}/admin")

# Reachable without a token
PUBLIC_ENDPOINTS = {"admin.login"}


@admin_required
def _require_admin():
    return None


@admin_bp.before_request
def _enforce_admin_role():
    """Ensure the requester holds an admin token."""
    if request.endpoint in PUBLIC_ENDPOINTS:
        return None
    return _require_admin()


from . import auth  # noqa: E402
from . import items  # noqa: E402
from . import orders  # noqa: E402
from . import availability  # noqa: E402
from . import settings  # noqa: E402
