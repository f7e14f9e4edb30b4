import logging
from typing import List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.setting import Setting, BLOCKED_DATES_KEY, ADMIN_EMAIL_KEY
from app.services.availability import parse_date
from app.services.errors import ValidationError

logger = logging.getLogger(__name__)


def _read(key: str):
    # A missing or unreadable setting is treated as unset
    try:
        row = db.session.get(Setting, key)
    except SQLAlchemyError as e:
        logger.error("Error loading setting %s: %s", key, e)
        db.session.rollback()
        return None
    return row.value if row else None


def _upsert(key: str, value) -> None:
    row = db.session.get(Setting, key)
    if row is None:
        db.session.add(Setting(key=key, value=value))
    else:
        row.value = value


def get_blocked_dates() -> List[str]:
    value = _read(BLOCKED_DATES_KEY)
    if not isinstance(value, list):
        return []
    return [str(d) for d in value]


def is_date_blocked(date_string: str) -> bool:
    return date_string in get_blocked_dates()


def toggle_blocked_date(date_string: str) -> List[str]:
    """Add the date if absent, remove it if present; persists the whole list.

    The caller owns the transaction.
    """
    day = parse_date(date_string)
    if day is None:
        raise ValidationError("date is required")
    key = day.isoformat()
    blocked = get_blocked_dates()
    if key in blocked:
        blocked = [d for d in blocked if d != key]
    else:
        blocked = blocked + [key]
    _upsert(BLOCKED_DATES_KEY, blocked)
    return blocked


def get_admin_email() -> Optional[str]:
    value = _read(ADMIN_EMAIL_KEY)
    if isinstance(value, str) and value.strip():
        return value.strip()
    fallback = (current_app.config.get("ADMIN_EMAIL") or "").strip()
    return fallback or None


def save_admin_email(email: str) -> str:
    email = (email or "").strip()
    _upsert(ADMIN_EMAIL_KEY, email)
    return email
