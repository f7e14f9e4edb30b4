from datetime import date
from flask import request
from app.services.availability import availability_month, tomorrow
from app.services.errors import ValidationError
from app.services.settings import get_blocked_dates
from app.utils import ok, error
from . import storefront_bp


@storefront_bp.route("/availability", methods=["GET"])
def month_availability():
    today = date.today()
    year = request.args.get("year", default=today.year, type=int)
    month = request.args.get("month", default=today.month, type=int)
    try:
        cells = availability_month(year, month, get_blocked_dates(), today)
    except ValidationError as e:
        return error(str(e), status=400)
    return ok({
        "year": year,
        "month": month,
        "earliest_date": tomorrow(today).isoformat(),
        "cells": cells,
    })
