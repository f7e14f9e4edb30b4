from flask import request
from app.schemas.admin import AdminEmailRequest
from app.services import settings as settings_service
from app.utils import ok, transactional, validate_schema, internal_error_response
from . import admin_bp


@admin_bp.route("/settings/email", methods=["GET"])
def get_admin_email():
    return ok({"email": settings_service.get_admin_email()})


@admin_bp.route("/settings/email", methods=["PUT"])
@validate_schema(AdminEmailRequest)
def save_admin_email():
    try:
        with transactional("Error saving admin email"):
            email = settings_service.save_admin_email(request.validated_data.email)
    except Exception:
        return internal_error_response()
    return ok({"email": email}, message="Admin email saved")
