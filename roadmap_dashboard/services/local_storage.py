# roadmap_dashboard/services/local_storage.py

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from roadmap_dashboard.db.base import Base
from roadmap_dashboard.db.models.storage_entry import StorageEntry
from roadmap_dashboard.db.session import create_session_factory

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    String key/value store with the browser localStorage contract
    (get_item / set_item / remove_item), persisted through SQLAlchemy.

    Each call opens and closes its own session; writes are best effort and
    are committed immediately.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @classmethod
    def from_engine(cls, engine: Engine) -> "LocalStorage":
        """Create the storage table if needed and bind a session factory to `engine`."""
        Base.metadata.create_all(bind=engine)
        return cls(create_session_factory(engine))

    def get_item(self, key: str) -> Optional[str]:
        with self._session_factory() as db:
            entry = self._get_entry(db, key)
            return entry.value if entry is not None else None

    def set_item(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            entry = self._get_entry(db, key)
            if entry is None:
                db.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value  # type: ignore[assignment]
            try:
                db.commit()
            except Exception:
                db.rollback()
                logger.exception("local_storage.set_item_failed", extra={"storage_key": key})
                raise
        logger.debug("local_storage.set_item", extra={"storage_key": key, "count": len(value)})

    def remove_item(self, key: str) -> None:
        with self._session_factory() as db:
            entry = self._get_entry(db, key)
            if entry is None:
                return
            db.delete(entry)
            db.commit()
        logger.debug("local_storage.remove_item", extra={"storage_key": key})

    @staticmethod
    def _get_entry(db: Session, key: str) -> Optional[StorageEntry]:
        stmt = select(StorageEntry).where(StorageEntry.key == key)
        return db.execute(stmt).scalar_one_or_none()


__all__ = ["LocalStorage"]
