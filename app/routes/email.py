import logging
from flask import Blueprint, jsonify, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.schemas.storefront import OrderEmailRequest
from app.services.errors import NotificationError
from app.services.notifications import send_order_emails
from app.services.settings import get_admin_email
from app.utils import validate_schema

logger = logging.getLogger(__name__)

email_bp = Blueprint("email", __name__, url_prefix="/api")


@email_bp.route("/send-email", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
)
@validate_schema(OrderEmailRequest)
def send_email():
    """Send the order confirmation and admin alert for a JSON order payload.

    Transport errors are logged and collapsed into a generic failure body.
    """
    if not current_app.config.get("RESEND_API_KEY"):
        logger.error("RESEND_API_KEY not configured")
        return jsonify({"error": "Email not configured"}), 500

    payload = request.validated_data
    admin_email = (payload.admin_email or "").strip() or get_admin_email()
    try:
        send_order_emails(payload.order(), admin_email)
    except NotificationError as e:
        logger.error("Email error: %s", e)
        return jsonify({"error": "Failed to send email"}), 500
    return jsonify({"success": True}), 200
