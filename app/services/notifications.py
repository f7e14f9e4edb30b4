"""Order notification emails.

One template serves both recipients: the customer gets a confirmation, the
admin address gets an alert that also carries the customer's email. Email is
a courtesy; nothing here may undo or block an order that is already saved.
"""
import logging
from collections import namedtuple
from typing import List, Optional

import requests
from flask import current_app, render_template
from opentelemetry import trace

from app.metrics import NOTIFICATION_FAILURES
from app.services.availability import parse_date
from app.services.cart import coerce_price
from app.services.errors import NotificationError, ValidationError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

NOT_SPECIFIED = "Not specified"

EmailMessage = namedtuple("EmailMessage", ["to", "subject", "html"])


def format_price(value) -> str:
    return "${:,.2f}".format(coerce_price(value))


def format_requested_date(value) -> str:
    try:
        day = parse_date(value)
    except ValidationError:
        return NOT_SPECIFIED
    if day is None:
        return NOT_SPECIFIED
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def describe_fulfillment(fulfillment_type: Optional[str], delivery_address: Optional[str] = None) -> str:
    if fulfillment_type == "delivery":
        return f"🚗 Delivery to {delivery_address or ''}".rstrip()
    if fulfillment_type == "gym":
        return "🏋️ Gym Pickup (6am)"
    return "📍 Pickup"


def _item_rows(items) -> List[dict]:
    rows = []
    for item in items or []:
        label = f"{item.get('emoji') or ''} {item.get('name') or ''}".strip()
        if item.get("selectedOption"):
            label = f"{label} ({item['selectedOption']})"
        quantity = int(item.get("quantity") or 0)
        rows.append({
            "label": label,
            "quantity": quantity,
            "line_total": format_price(coerce_price(item.get("price")) * quantity),
        })
    return rows


def render_order_html(order: dict, for_admin: bool) -> str:
    return render_template(
        "emails/order.html",
        order=order,
        for_admin=for_admin,
        bakery_name=current_app.config["BAKERY_NAME"],
        requested_date=format_requested_date(order.get("requested_date")),
        fulfillment=describe_fulfillment(order.get("fulfillment_type"), order.get("delivery_address")),
        rows=_item_rows(order.get("items")),
        total=format_price(order.get("total")),
    )


def build_order_emails(order: dict, admin_email: Optional[str] = None) -> List[EmailMessage]:
    bakery = current_app.config["BAKERY_NAME"]
    messages = [
        EmailMessage(
            to=order.get("customer_email"),
            subject=f"🫏 Your {bakery} Order Confirmation",
            html=render_order_html(order, for_admin=False),
        )
    ]
    if admin_email:
        messages.append(
            EmailMessage(
                to=admin_email,
                subject=f"🫏 New Order from {order.get('customer_name')}!",
                html=render_order_html(order, for_admin=True),
            )
        )
    return messages


def send_email(message: EmailMessage) -> None:
    """POST one message to the transactional email API. No retries."""
    cfg = current_app.config
    api_key = cfg.get("RESEND_API_KEY")
    if not api_key:
        raise NotificationError("Email not configured")
    with tracer.start_as_current_span("email.send"):
        try:
            resp = requests.post(
                cfg["RESEND_API_URL"],
                json={
                    "from": cfg["EMAIL_FROM"],
                    "to": [message.to],
                    "subject": message.subject,
                    "html": message.html,
                },
                headers={"Authorization": f"Bearer {api_key}"},
                timeout=cfg["EMAIL_TIMEOUT_SECONDS"],
            )
        except requests.RequestException as e:
            raise NotificationError(f"Email transport failed: {e}") from e
    if not resp.ok:
        raise NotificationError(f"Email provider returned {resp.status_code}")


def send_order_emails(order: dict, admin_email: Optional[str] = None) -> int:
    """Send every message for ``order``; returns how many went out.

    Each message is attempted even if an earlier one failed. Raises
    NotificationError afterwards if any of them failed.
    """
    if not current_app.config.get("RESEND_API_KEY"):
        logger.error("RESEND_API_KEY not configured")
        raise NotificationError("Email not configured")
    sent = 0
    failures = []
    for message in build_order_emails(order, admin_email):
        try:
            send_email(message)
            sent += 1
        except NotificationError as e:
            logger.error("Order %s email failed: %s", order.get("id"), e)
            failures.append(str(e))
    if failures:
        NOTIFICATION_FAILURES.inc(len(failures))
        raise NotificationError("; ".join(failures))
    logger.info("Order %s emails sent: %s", order.get("id"), sent)
    return sent


def dispatch_order_emails(order: dict, admin_email: Optional[str] = None) -> None:
    """Queue the order emails and return immediately; failures are only logged."""
    from app.tasks.notifications import send_order_emails_task

    try:
        send_order_emails_task.delay(order, admin_email)
    except Exception:
        NOTIFICATION_FAILURES.inc()
        logger.exception("Failed to dispatch emails for order %s", order.get("id"))
