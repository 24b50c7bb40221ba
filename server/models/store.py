# server/models/store.py

from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
from . import Base


# -------------------------------
# Key-Value Store Model
# -------------------------------

class StoreEntry(Base):
    """
    One serialized collection per key.
    The value column holds the whole collection as a JSON list.
    """
    __tablename__ = "store_entries"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
