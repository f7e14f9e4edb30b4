import os


class BaseConfig:
    JSON_SORT_KEYS = False
    JSON_AS_ASCII = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    RATELIMIT_STORAGE_URL = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    ORDER_LIMIT_PER_IP = os.getenv("ORDER_LIMIT_PER_IP", "20 per hour")
    ADMIN_LOGIN_LIMIT_PER_IP = os.getenv("ADMIN_LOGIN_LIMIT_PER_IP", "10 per 30 minutes")

    # Admin gate: one shared password, exchanged for a short-lived token
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "theresa")
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-insecure-jwt-key")
    ADMIN_TOKEN_LIFETIME_MIN = int(os.getenv("ADMIN_TOKEN_LIFETIME_MIN", 240))

    # Notifications
    BAKERY_NAME = os.getenv("BAKERY_NAME", "Badass Bakery")
    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
    RESEND_API_KEY = os.getenv("RESEND_API_KEY")
    RESEND_API_URL = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
    EMAIL_FROM = os.getenv("EMAIL_FROM", "Badass Bakery <onboarding@resend.dev>")
    EMAIL_TIMEOUT_SECONDS = float(os.getenv("EMAIL_TIMEOUT_SECONDS", 10))

    CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "0") == "1"
    # Other workers and hosts write orders this process never hears about
    ORDER_BOARD_REFRESH_ON_READ = os.getenv("ORDER_BOARD_REFRESH_ON_READ", "1") == "1"
    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "bakery-storefront")
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///dev.db")


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-key"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    ORDER_LIMIT_PER_IP = "1000 per hour"
    ADMIN_LOGIN_LIMIT_PER_IP = "1000 per hour"
    ADMIN_PASSWORD = "theresa"
    ADMIN_EMAIL = "owner@example.com"
    RESEND_API_KEY = "re_test_key"
    CELERY_TASK_ALWAYS_EAGER = True


class ProductionConfig(BaseConfig):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv("SECRET_KEY")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")

    @staticmethod
    def validate():
        missing = []
        for key in ("SECRET_KEY", "DATABASE_URL", "JWT_SECRET", "ADMIN_PASSWORD"):
            if not os.getenv(key):
                missing.append(key)
        if missing:
            raise RuntimeError(
                f"Missing required env vars in production: {', '.join(missing)}"
            )


def get_config_class():
    env = os.getenv("APP_ENV", "development").lower()
    if env == "production":
        ProductionConfig.validate()
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
