from app.services import settings as settings_service
from app.services.availability import parse_date
from app.services.errors import ValidationError
from app.utils import ok, error, transactional, internal_error_response
from . import admin_bp


@admin_bp.route("/blocked-dates", methods=["GET"])
def list_blocked_dates():
    return ok({"blocked_dates": sorted(settings_service.get_blocked_dates())})


@admin_bp.route("/blocked-dates/<date_string>/toggle", methods=["POST"])
def toggle_blocked_date(date_string):
    try:
        day = parse_date(date_string)
        with transactional("Error saving blocked dates"):
            blocked = settings_service.toggle_blocked_date(date_string)
    except ValidationError as e:
        return error(str(e), status=400)
    except Exception:
        return internal_error_response()
    return ok({"date": day.isoformat(), "blocked": day.isoformat() in blocked, "blocked_dates": sorted(blocked)})
