"""Key-value entry model backing the persisted campus collections."""

from sqlalchemy import Column, String, Text
from app.models.base import Base, TimestampMixin


class KeyValueEntry(Base, TimestampMixin):
    """One JSON-serialized collection blob stored under a string key."""

    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
