from .storefront import storefront_bp
from .admin import admin_bp
from .email import email_bp


__all__ = [
    'storefront_bp',
    'admin_bp',
    'email_bp',
]
