import hmac
from functools import wraps
from flask import request, g, current_app
from .responses import error
from .jwt import decode_token, TokenError


def password_matches(candidate: str) -> bool:
    """Compare a login attempt with the shared admin password, ignoring case.

    This is a convenience gate for a single trusted operator, not a user
    account system.
    """
    expected = (current_app.config.get("ADMIN_PASSWORD") or "").lower()
    if not expected:
        return False
    return hmac.compare_digest((candidate or "").lower().encode(), expected.encode())


def admin_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        auth = request.headers.get("Authorization", "")
        if not auth:
            return error("Auth header missing", status=401)
        token = auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401)
        if payload.get("role") != "admin":
            return error("Forbidden", status=403)
        g.role = payload["role"]
        return func(*args, **kwargs)

    return wrapper
