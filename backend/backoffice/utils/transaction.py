from contextlib import contextmanager
from flask import current_app
from backoffice.extensions import db

@contextmanager
def transactional():
    """Context manager for database transactions."""
    try:
        yield
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.debug(f"Transaction rolled back: {type(exc).__name__}: {exc}")
        raise
