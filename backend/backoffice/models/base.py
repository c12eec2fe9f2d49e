from datetime import datetime, timezone
import uuid
from backoffice.extensions import db


def utc_now() -> datetime:
    """
    Naive UTC timestamp.

    Stored naive so that values read back from SQLite and values still held
    in the session compare cleanly; see utils.optimistic_lock.normalize_ts.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(db.Model):
    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    created_at = db.Column(db.DateTime, default=utc_now, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utc_now, onupdate=utc_now, index=True)

    def __init__(self, **kwargs):
        """
        Dummy __init__ to satisfy static type checkers (Pylance, MyPy).
        SQLAlchemy ORM will populate fields dynamically.
        """
        super().__init__(**kwargs)
