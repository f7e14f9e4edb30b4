from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .item import MenuItem  # noqa: F401,E402
from .order import Order  # noqa: F401,E402
from .setting import Setting  # noqa: F401,E402
