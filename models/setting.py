from models import db

BLOCKED_DATES_KEY = "blocked_dates"
ADMIN_EMAIL_KEY = "admin_email"


class Setting(db.Model):
    """Key/value row; ``value`` holds arbitrary JSON."""

    __tablename__ = "settings"

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.JSON, nullable=True)

    def __repr__(self):
        return f"<Setting key={self.key}>"
