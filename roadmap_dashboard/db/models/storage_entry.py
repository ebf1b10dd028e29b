# roadmap_dashboard/db/models/storage_entry.py

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text

from roadmap_dashboard.db.base import Base


class StorageEntry(Base):
    """One key/value slot of the local store (the whole aggregate lives under a single key)."""

    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
