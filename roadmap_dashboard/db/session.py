# roadmap_dashboard/db/session.py

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roadmap_dashboard.config import settings  # expects DATABASE_URL


def create_storage_engine(database_url: str) -> Engine:
    """Build an engine; in-memory SQLite shares one connection so the data outlives a session."""
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, future=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


engine = create_storage_engine(settings.DATABASE_URL)
