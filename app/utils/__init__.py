from .responses import ok, error, error_response, validation_error_response, internal_error_response
from .auth import admin_required, password_matches
from .validation import validate_schema
from .db import transactional
from .jwt import (
    create_admin_token,
    decode_token,
    TokenError,
)

__all__ = [
    'ok',
    'error',
    'error_response',
    'validation_error_response',
    'internal_error_response',
    'admin_required',
    'password_matches',
    'create_admin_token',
    'decode_token',
    'TokenError',
    'validate_schema',
    'transactional',
]
