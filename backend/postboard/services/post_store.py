"""
Postboard Backend — Post Store Adapter
========================================

What:  Single choke point for every persistence operation on posts.
Why:   Keeps SQLAlchemy sessions, statements and driver errors out of the
       service and route layers.
How:   One PostStore per process owns the AsyncEngine. Each operation opens
       its own short-lived AsyncSession, runs one statement under a timeout,
       and returns PostRecord schemas (never ORM objects).
Who:   Created and connected by the application lifespan; handed to route
       handlers through the get_post_store() dependency.

Outcome contract:
    list_all()  → list of records (possibly empty)
    create()    → the new record                      | StoreError
    update()    → the updated record, or None          | StoreError
    delete()    → True, or False when nothing matched  | StoreError

    None/False mean "no post with that id" and are normal results. An id
    that is not a well-formed UUID cannot match any row and takes the same
    path.
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from fastapi import Request
from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from postboard.database import Base, build_engine, build_session_factory
from postboard.exceptions import StoreConnectionError, StoreError
from postboard.models.post import Post
from postboard.schemas.post import PostRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _parse_id(post_id: str) -> Optional[uuid.UUID]:
    """Returns the UUID behind a wire id, or None if it is not one."""
    try:
        return uuid.UUID(str(post_id))
    except (ValueError, AttributeError, TypeError):
        return None


def _to_record(post: Post) -> PostRecord:
    return PostRecord(id=str(post.id), title=post.title, content=post.content)


class PostStore:
    """
    Async adapter over the `posts` table.

    Args:
        database_url: SQLAlchemy async URL of the store
        timeout: Seconds allowed for one operation before StoreError
        pool_size / max_overflow / pool_pre_ping: Engine pool options
            (ignored for SQLite)
        echo: Log SQL statements

    Usage:
        store = PostStore("sqlite+aiosqlite:///./postboard.db")
        await store.connect()
        record = await store.create("Hello", "World")
        await store.close()
    """

    def __init__(
        self,
        database_url: str,
        timeout: float = 10.0,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.database_url = database_url
        self.timeout = timeout
        self._engine_options = {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_pre_ping": pool_pre_ping,
            "echo": echo,
        }
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    # ── Connection Lifecycle ──────────────────────────────────────────────

    async def connect(self) -> None:
        """
        Open the engine, verify the store answers, and ensure the table exists.

        Raises:
            StoreConnectionError: Malformed URL, unknown driver, unreachable
                server or unopenable database file. The engine is disposed
                before raising.
        """
        try:
            engine = build_engine(self.database_url, **self._engine_options)
        except Exception as e:
            logger.error("Invalid store connection target: %s", type(e).__name__)
            raise StoreConnectionError(
                message="Store connection target is malformed",
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        try:
            await asyncio.wait_for(self._prepare(engine), timeout=self.timeout)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            await engine.dispose()
            logger.error("Could not connect to store: %s", str(e))
            raise StoreConnectionError(
                context={"error_type": type(e).__name__, "error": str(e)},
            ) from e

        self._engine = engine
        self._session_factory = build_session_factory(engine)
        logger.info("Connected to store (%s)", engine.url.get_backend_name())

    @staticmethod
    async def _prepare(engine: AsyncEngine) -> None:
        """Open a connection, run SELECT 1 and create the posts table if missing."""
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Dispose the engine and all pooled connections. Safe to call twice."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Store connection closed")
        self._engine = None
        self._session_factory = None

    # ── Operations ────────────────────────────────────────────────────────

    async def list_all(self) -> List[PostRecord]:
        """Every stored post, in the order the store returns them."""

        async def work(session: AsyncSession) -> List[PostRecord]:
            result = await session.execute(select(Post))
            return [_to_record(post) for post in result.scalars().all()]

        return await self._run("list_all", work)

    async def create(self, title: Any, content: Any) -> PostRecord:
        """
        Insert a new post; the store assigns its id.

        title/content are passed through unchecked. A missing value violates
        the NOT NULL columns and surfaces as StoreError.
        """

        async def work(session: AsyncSession) -> PostRecord:
            post = Post(title=title, content=content)
            session.add(post)
            await session.commit()
            return _to_record(post)

        return await self._run("create", work)

    async def update(self, post_id: str, title: Any, content: Any) -> Optional[PostRecord]:
        """Replace title and content of a post. None if the id matches nothing."""
        pk = _parse_id(post_id)
        if pk is None:
            return None

        async def work(session: AsyncSession) -> Optional[PostRecord]:
            result = await session.execute(
                update(Post)
                .where(Post.id == pk)
                .values(title=title, content=content)
                .execution_options(synchronize_session=False)
            )
            await session.commit()
            if result.rowcount == 0:
                return None
            return PostRecord(id=str(pk), title=title, content=content)

        return await self._run("update", work)

    async def delete(self, post_id: str) -> bool:
        """Remove a post. False if the id matches nothing."""
        pk = _parse_id(post_id)
        if pk is None:
            return False

        async def work(session: AsyncSession) -> bool:
            result = await session.execute(
                delete(Post)
                .where(Post.id == pk)
                .execution_options(synchronize_session=False)
            )
            await session.commit()
            return result.rowcount > 0

        return await self._run("delete", work)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _run(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
    ) -> T:
        """
        Run `work` in a fresh session, bounded by the store timeout.

        Every failure mode becomes StoreError with the operation name in its
        context. The session rolls back on exit if `work` did not commit.
        """
        if self._session_factory is None:
            raise StoreError(context={"operation": operation, "reason": "not_connected"})

        try:
            async with self._session_factory() as session:
                return await asyncio.wait_for(work(session), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("Store operation '%s' timed out after %.1fs", operation, self.timeout)
            raise StoreError(
                context={"operation": operation, "reason": "timeout", "timeout": self.timeout},
            ) from e
        except (SQLAlchemyError, OSError) as e:
            logger.error("Store operation '%s' failed: %s", operation, str(e))
            raise StoreError(
                context={"operation": operation, "error_type": type(e).__name__},
            ) from e


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_post_store(request: Request) -> PostStore:
    """
    Provides the process-wide PostStore to a route handler.

    The lifespan stores it on app.state; tests may place their own there.

    Raises:
        StoreError: No connected store is attached to the application.
    """
    store = getattr(request.app.state, "post_store", None)
    if store is None:
        raise StoreError(context={"reason": "store_not_configured"})
    return store
