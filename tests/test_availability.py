from datetime import date, timedelta

import pytest

from app.services.availability import (
    availability_month,
    calendar_days,
    is_date_blocked,
    is_date_selectable,
    parse_date,
    tomorrow,
)
from app.services.errors import ValidationError
from app.services import settings as settings_service
from models import db

TODAY = date(2025, 5, 20)


def test_calendar_grid_for_month_starting_wednesday():
    # January 2025 starts on a Wednesday
    cells = calendar_days(2025, 1)
    assert cells[:3] == [None, None, None]
    assert cells[3] == date(2025, 1, 1)
    assert cells[-1] == date(2025, 1, 31)
    assert len(cells) == 3 + 31


def test_calendar_grid_for_month_starting_sunday():
    # June 2025 starts on a Sunday: no placeholders, no trailing padding
    cells = calendar_days(2025, 6)
    assert cells[0] == date(2025, 6, 1)
    assert len(cells) == 30


def test_calendar_grid_handles_leap_february():
    cells = calendar_days(2024, 2)
    assert cells.count(None) == 4
    assert cells[-1] == date(2024, 2, 29)


def test_calendar_rejects_bad_month():
    with pytest.raises(ValidationError):
        calendar_days(2025, 13)


def test_picker_rules_are_independent():
    blocked = ["2025-05-25"]
    assert tomorrow(TODAY) == date(2025, 5, 21)
    assert not is_date_selectable(TODAY, blocked, TODAY)
    assert not is_date_selectable(date(2025, 5, 19), [], TODAY)
    assert is_date_selectable(date(2025, 5, 21), blocked, TODAY)
    assert not is_date_selectable(date(2025, 5, 25), blocked, TODAY)
    assert is_date_blocked("2025-05-25", blocked)
    assert not is_date_blocked("2025-05-26", blocked)


def test_availability_month_annotates_cells():
    cells = availability_month(2025, 5, ["2025-05-25"], TODAY)
    by_date = {c["date"]: c for c in cells if c}
    assert by_date["2025-05-20"]["today"] is True
    assert by_date["2025-05-20"]["selectable"] is False
    assert by_date["2025-05-19"]["past"] is True
    assert by_date["2025-05-25"]["blocked"] is True
    assert by_date["2025-05-26"]["selectable"] is True
    # May 2025 starts on a Thursday
    assert cells[:4] == [None] * 4


def test_parse_date():
    assert parse_date(None) is None
    assert parse_date("  ") is None
    assert parse_date("2025-06-01") == date(2025, 6, 1)
    with pytest.raises(ValidationError):
        parse_date("June 1st")


def test_toggle_blocked_date_is_its_own_inverse(app):
    with app.app_context():
        settings_service.toggle_blocked_date("2025-07-04")
        db.session.commit()
        assert settings_service.is_date_blocked("2025-07-04")
        settings_service.toggle_blocked_date("2025-07-04")
        db.session.commit()
        assert not settings_service.is_date_blocked("2025-07-04")
        assert settings_service.get_blocked_dates() == []


def test_availability_endpoint(client):
    upcoming = date.today() + timedelta(days=10)
    resp = client.get(f"/api/v1/availability?year={upcoming.year}&month={upcoming.month}")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["earliest_date"] == (date.today() + timedelta(days=1)).isoformat()
    cell = next(c for c in data["cells"] if c and c["date"] == upcoming.isoformat())
    assert cell["selectable"] is True


def test_availability_endpoint_rejects_bad_month(client):
    resp = client.get("/api/v1/availability?year=2025&month=0")
    assert resp.status_code == 400
    assert resp.get_json()["status"] == "error"


def test_admin_blocks_date_and_picker_sees_it(client, admin_headers):
    upcoming = date.today() + timedelta(days=10)
    resp = client.post(f"/api/v1/admin/blocked-dates/{upcoming.isoformat()}/toggle", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["blocked"] is True

    listing = client.get("/api/v1/admin/blocked-dates", headers=admin_headers).get_json()["data"]
    assert listing["blocked_dates"] == [upcoming.isoformat()]

    data = client.get(f"/api/v1/availability?year={upcoming.year}&month={upcoming.month}").get_json()["data"]
    cell = next(c for c in data["cells"] if c and c["date"] == upcoming.isoformat())
    assert cell["blocked"] is True
    assert cell["selectable"] is False

    resp = client.post(f"/api/v1/admin/blocked-dates/{upcoming.isoformat()}/toggle", headers=admin_headers)
    assert resp.get_json()["data"]["blocked"] is False


def test_toggle_rejects_invalid_date(client, admin_headers):
    resp = client.post("/api/v1/admin/blocked-dates/not-a-date/toggle", headers=admin_headers)
    assert resp.status_code == 400
