"""
Base model class for SQLAlchemy ORM.

Re-exports the Base class from the database module and the id/timestamp
defaults shared by every document-style table.
"""

import uuid
from datetime import datetime, timezone

from skillshare.db import Base


def new_id() -> str:
    """Generate a document id."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["Base", "new_id", "utcnow"]
