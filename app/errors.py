import logging
from flask import Blueprint
from werkzeug.exceptions import HTTPException
from app.services.errors import NotFoundError, ValidationError
from app.utils.responses import error

errors_bp = Blueprint("errors_bp", __name__)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(ValidationError)
def handle_validation_error(e):
    return error(str(e), status=400)


@errors_bp.app_errorhandler(NotFoundError)
def handle_not_found(e):
    return error(str(e), status=404)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return error(
        "An unexpected error occurred. Please try again later.",
        status=500,
        code=500,
    )
