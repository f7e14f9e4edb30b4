import logging
from flask import request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.schemas.admin import AdminLoginRequest
from app.utils import ok, error, validate_schema, password_matches, create_admin_token
from . import admin_bp

logger = logging.getLogger(__name__)


@admin_bp.route("/login", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ADMIN_LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many login attempts",
)
@validate_schema(AdminLoginRequest)
def login():
    if not password_matches(request.validated_data.password):
        logger.warning("Admin login rejected")
        return error("Invalid password", status=401)
    return ok({
        "access": create_admin_token(),
        "expires_in": current_app.config["ADMIN_TOKEN_LIFETIME_MIN"] * 60,
    })
