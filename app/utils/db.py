from contextlib import contextmanager
import logging
from models import db


@contextmanager
def transactional(message="DB transaction failed"):
    """Commit the session on success; log, roll back and re-raise on failure."""
    try:
        yield db.session
        db.session.commit()
    except Exception as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise
