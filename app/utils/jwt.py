import datetime as dt
from typing import Dict
import jwt
from flask import current_app

ADMIN_SUBJECT = "admin"


def _secret() -> str:
    return current_app.config["JWT_SECRET"]


def _utcnow():
    return dt.datetime.now(dt.timezone.utc)


def create_admin_token(minutes: int = None) -> str:
    lifetime = minutes or current_app.config["ADMIN_TOKEN_LIFETIME_MIN"]
    payload: Dict = {
        "sub": ADMIN_SUBJECT,
        "role": "admin",
        "type": "access",
        "exp": _utcnow() + dt.timedelta(minutes=lifetime),
    }
    return jwt.encode(payload, _secret(), algorithm="HS256")


class TokenError(Exception):
    pass


def decode_token(token: str, expected_type: str = "access") -> Dict:
    try:
        data = jwt.decode(token, _secret(), algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise TokenError("token expired")
    except jwt.InvalidTokenError:
        raise TokenError("invalid token")

    if data.get("type") != expected_type:
        raise TokenError(f"expected {expected_type} token")
    return data
