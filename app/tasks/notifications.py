import logging
from contextlib import contextmanager

from celery import shared_task
from flask import has_app_context

from app.services.errors import NotificationError

logger = logging.getLogger(__name__)

# One app per worker process, built on first use
_worker_app = None


def _get_worker_app():
    global _worker_app
    if _worker_app is None:
        from app import create_app
        _worker_app = create_app()
    return _worker_app


@contextmanager
def _app_context():
    # Eager tasks run inside the request's app context; workers need their own
    if has_app_context():
        yield
        return
    with _get_worker_app().app_context():
        yield


@shared_task(bind=True, ignore_result=True)
def send_order_emails_task(self, order: dict, admin_email: str = None) -> int:
    """Send the customer confirmation and admin alert for a saved order.

    Not retried: a lost email never affects the order itself.
    """
    from app.services.notifications import send_order_emails

    with _app_context():
        try:
            return send_order_emails(order, admin_email)
        except NotificationError as exc:
            logger.warning("Order %s notification not delivered: %s", order.get("id"), exc)
            return 0
