"""
Database
SQLAlchemy engine, session factory and declarative base.
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from legalens.config import get_settings


Base = declarative_base()


@lru_cache()
def get_engine() -> Engine:
    """Create the engine for the configured database (cached)."""
    settings = get_settings()
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


@lru_cache()
def get_session_factory() -> sessionmaker:
    """Session factory shared by repositories and background tasks."""
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)


def create_tables(engine: Engine | None = None):
    """Create all tables registered on the declarative base."""
    # Register models on Base.metadata
    import legalens.models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
