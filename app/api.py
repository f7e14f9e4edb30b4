from app.routes import storefront_bp, admin_bp, email_bp


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(storefront_bp)
    app.register_blueprint(admin_bp)
    # Legacy unversioned path used by the storefront's email hook
    app.register_blueprint(email_bp)
