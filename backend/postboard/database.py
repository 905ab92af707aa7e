"""
Postboard Backend — Engine Construction
=========================================

What:  Declarative base for ORM models and the async engine factory.
How:   build_engine() turns a connection URL into an AsyncEngine with pool
       options suited to the backend; build_session_factory() wraps it.
Who:   Used by PostStore.connect() only. No engine exists at import time;
       the one engine per process is owned by the PostStore the lifespan
       creates.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


def build_engine(
    database_url: str,
    pool_size: int = 10,
    max_overflow: int = 5,
    pool_pre_ping: bool = True,
    echo: bool = False,
) -> AsyncEngine:
    """
    Create the async engine for a connection URL.

    Raises sqlalchemy.exc.ArgumentError for a malformed URL and
    ModuleNotFoundError/NoSuchModuleError for an unknown driver; callers
    translate both into StoreConnectionError.
    """
    url = make_url(database_url)
    options = {"pool_pre_ping": pool_pre_ping, "echo": echo}

    # SQLite pools (StaticPool/NullPool variants) reject size options
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=3600,
        )

    return create_async_engine(url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps attribute access working on a post after
    its insert is committed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
