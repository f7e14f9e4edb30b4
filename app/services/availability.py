"""Date availability for the order picker and the admin calendars.

Two independent rules decide whether a customer may pick a date: the admin
may block it, and nothing before tomorrow is ever offered. The rules are
combined here and nowhere else.
"""
import calendar
from datetime import date, timedelta
from typing import Iterable, List, Optional

from app.services.errors import ValidationError


def parse_date(value) -> Optional[date]:
    """Parse an ISO ``YYYY-MM-DD`` string; ``None``/blank stays ``None``."""
    if value is None or isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid date: {text}")


def tomorrow(today: Optional[date] = None) -> date:
    return (today or date.today()) + timedelta(days=1)


def is_past_date(day: date, today: Optional[date] = None) -> bool:
    return day < (today or date.today())


def is_date_blocked(date_string: str, blocked: Iterable[str]) -> bool:
    return date_string in set(blocked)


def is_date_selectable(day: date, blocked: Iterable[str], today: Optional[date] = None) -> bool:
    if day < tomorrow(today):
        return False
    return not is_date_blocked(day.isoformat(), blocked)


def validate_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise ValidationError("year out of range")


def calendar_days(year: int, month: int) -> List[Optional[date]]:
    """Cells for a Sunday-first month grid.

    Leading ``None`` placeholders fill the weekday offset of day 1; the grid
    stops at the last day of the month.
    """
    validate_month(year, month)
    first = date(year, month, 1)
    offset = (first.weekday() + 1) % 7
    days_in_month = calendar.monthrange(year, month)[1]
    cells: List[Optional[date]] = [None] * offset
    cells.extend(date(year, month, day) for day in range(1, days_in_month + 1))
    return cells


def availability_month(year: int, month: int, blocked: Iterable[str], today: Optional[date] = None):
    today = today or date.today()
    blocked = set(blocked)
    cells = []
    for day in calendar_days(year, month):
        if day is None:
            cells.append(None)
            continue
        cells.append({
            "date": day.isoformat(),
            "blocked": day.isoformat() in blocked,
            "past": is_past_date(day, today),
            "today": day == today,
            "selectable": is_date_selectable(day, blocked, today),
        })
    return cells
