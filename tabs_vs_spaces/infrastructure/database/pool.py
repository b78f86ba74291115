"""Connection pool: a bounded async engine behind an admission gate that applies the queuing policy."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar

from sqlalchemy.engine import URL, CursorResult, make_url
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as SQLAlchemyTimeoutError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.sql import text

from tabs_vs_spaces.application.exceptions import (
    ConnectTimeoutError,
    DatabaseUnavailableError,
    PoolExhaustedError,
    PoolTimeoutError,
    QueryError,
    StorageError,
)
from tabs_vs_spaces.config.settings import AppSettings
from tabs_vs_spaces.infrastructure.database.models import Base

T = TypeVar("T")

# The gate enforces the acquire timeout; the engine's own pool timeout only backstops it and must stay positive.
ENGINE_POOL_TIMEOUT_FLOOR = 1.0


class ConnectionGate:
    """
    Caps concurrent checkouts at the pool size. Callers beyond the cap wait (optionally in a bounded
    queue) for up to acquire_timeout, or fail immediately when waiting is disabled. Async-safe.
    """

    def __init__(
        self,
        max_concurrent: int = 5,
        max_queued: int = 0,
        wait: bool = True,
        acquire_timeout: float = 10.0,
    ) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._max_concurrent = max_concurrent
        self._max_queued = max_queued
        self._wait = wait
        self._acquire_timeout = acquire_timeout
        self._active = 0
        self._waiting = 0

    @property
    def active_count(self) -> int:
        return self._active

    @property
    def waiting_count(self) -> int:
        return self._waiting

    async def _acquire(self) -> None:
        if not self._semaphore.locked():
            await self._semaphore.acquire()
            return
        if not self._wait:
            raise PoolExhaustedError("No free database connection and waiting is disabled")
        if self._max_queued and self._waiting >= self._max_queued:
            raise PoolExhaustedError(
                f"Connection wait queue full ({self._max_queued} callers waiting)"
            )
        self._waiting += 1
        try:
            await asyncio.wait_for(self._semaphore.acquire(), timeout=self._acquire_timeout)
        except asyncio.TimeoutError:
            raise PoolTimeoutError(
                f"Timed out after {self._acquire_timeout}s waiting for a database connection"
            ) from None
        finally:
            self._waiting -= 1

    async def submit(
        self,
        task: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run task once a slot is free. Raises PoolExhaustedError or PoolTimeoutError when admission fails."""
        await self._acquire()
        self._active += 1
        try:
            return await task(*args, **kwargs)
        finally:
            self._active -= 1
            self._semaphore.release()


def _connect_args(url: URL, connect_timeout: float) -> dict:
    """Driver-specific keyword for the connection-establish timeout."""
    backend = url.get_backend_name()
    if backend == "mysql":
        return {"connect_timeout": connect_timeout}
    if backend in ("postgresql", "sqlite"):
        return {"timeout": connect_timeout}
    return {}


def _is_timeout(exc: SQLAlchemyError) -> bool:
    cause: Optional[BaseException] = getattr(exc, "orig", None)
    while cause is not None:
        if isinstance(cause, (TimeoutError, asyncio.TimeoutError)):
            return True
        cause = cause.__cause__
    return False


def translate_error(exc: SQLAlchemyError) -> StorageError:
    """Map a SQLAlchemy failure onto the typed storage errors callers handle."""
    if isinstance(exc, SQLAlchemyTimeoutError):
        return PoolTimeoutError(f"Connection pool checkout timed out: {exc}")
    if isinstance(exc, (OperationalError, InterfaceError)):
        if _is_timeout(exc):
            return ConnectTimeoutError(f"Timed out connecting to the database: {exc}")
        return DatabaseUnavailableError(f"Database unavailable: {exc}")
    return QueryError(f"Statement failed: {exc}")


class Database:
    """
    Owns the engine (bounded connection pool) for the process. Every public call is one
    acquire-execute-release cycle: the connection goes back to the pool on success or failure.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 5,
        connect_timeout: float = 10.0,
        acquire_timeout: float = 10.0,
        wait_for_connections: bool = True,
        queue_limit: int = 0,
        echo: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._url = make_url(url)
        self._logger = logger or logging.getLogger(__name__)
        self._engine: AsyncEngine = create_async_engine(
            self._url,
            echo=echo,
            pool_pre_ping=True,
            pool_size=pool_size,
            max_overflow=0,
            pool_timeout=max(acquire_timeout, ENGINE_POOL_TIMEOUT_FLOOR),
            connect_args=_connect_args(self._url, connect_timeout),
        )
        self._gate = ConnectionGate(
            max_concurrent=pool_size,
            max_queued=queue_limit,
            wait=wait_for_connections,
            acquire_timeout=acquire_timeout,
        )

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "Database":
        return cls(
            settings.sqlalchemy_url(),
            pool_size=settings.db_pool_size,
            connect_timeout=settings.db_connect_timeout,
            acquire_timeout=settings.db_acquire_timeout,
            wait_for_connections=settings.db_wait_for_connections,
            queue_limit=settings.db_queue_limit,
            echo=settings.db_echo,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def _run(
        self,
        statement: Any,
        params: Optional[Mapping[str, Any]],
        consume: Callable[[CursorResult], T],
        commit: bool,
    ) -> T:
        async with self._engine.connect() as conn:
            result = await conn.execute(statement, params)
            value = consume(result)
            if commit:
                await conn.commit()
            return value

    async def _submit(
        self,
        statement: Any,
        params: Optional[Mapping[str, Any]],
        consume: Callable[[CursorResult], T],
        commit: bool = False,
    ) -> T:
        try:
            return await self._gate.submit(self._run, statement, params, consume, commit)
        except SQLAlchemyError as e:
            raise translate_error(e) from e

    async def fetch_all(self, statement: Any, params: Optional[Mapping[str, Any]] = None) -> list:
        """Run a query and return every row."""
        return await self._submit(statement, params, lambda result: result.all())

    async def fetch_scalar(self, statement: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Run a query that yields exactly one value."""
        return await self._submit(statement, params, lambda result: result.scalar_one())

    async def execute(self, statement: Any, params: Optional[Mapping[str, Any]] = None) -> int:
        """Run a write statement, commit, and return the affected row count."""
        return await self._submit(statement, params, lambda result: result.rowcount, commit=True)

    async def insert(self, statement: Any, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Run a single-row INSERT, commit, and return the generated primary key."""
        return await self._submit(
            statement, params, lambda result: result.inserted_primary_key[0], commit=True
        )

    async def ensure_schema(self) -> None:
        """Create the votes table if it does not exist. Raises StorageError; callers treat it as fatal."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            self._logger.error("schema_bootstrap_failed", extra={"error": str(e)})
            raise translate_error(e) from e
        self._logger.info("schema_ready")

    async def ping(self) -> bool:
        """Round-trip SELECT 1 through the pool. Raises StorageError when the database is unreachable."""
        return await self.fetch_scalar(text("SELECT 1")) == 1

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self._engine.dispose()
