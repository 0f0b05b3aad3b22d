# app/core/db.py

import asyncio
import ssl
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import (
    APP_ENV,
    DATABASE_URL,
    DB_ECHO_POOL,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT,
    DB_SSL,
    DB_SSL_VERIFY,
)
from app.core.exceptions import DatabaseError
from app.utils.logger import get_logger

logger = get_logger(__name__)

# =====================================================
# BASE
# =====================================================
Base = declarative_base()


# =====================================================
# ENGINE
# =====================================================
def create_db_engine(url=DATABASE_URL) -> AsyncEngine:
    backend = make_url(url).get_backend_name()

    connect_args = {}
    pool_args = {}

    if backend == "postgresql":
        if DB_SSL:
            ssl_ctx = ssl.create_default_context()
            if not DB_SSL_VERIFY:
                ssl_ctx.check_hostname = False
                ssl_ctx.verify_mode = ssl.CERT_NONE
            connect_args["ssl"] = ssl_ctx

        pool_args = {
            "pool_size": DB_POOL_SIZE,
            "max_overflow": 0,
            "pool_timeout": DB_POOL_TIMEOUT,
            "pool_pre_ping": True,
        }

    elif backend == "sqlite":
        connect_args = {"check_same_thread": False}

    engine = create_async_engine(
        url,
        echo=False,
        echo_pool=DB_ECHO_POOL,
        connect_args=connect_args,
        **pool_args,
    )

    if backend == "sqlite":
        @event.listens_for(engine.sync_engine, "connect")
        def enable_sqlite_foreign_keys(dbapi_connection, _):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# =====================================================
# ERRORS
# =====================================================
def _native_error_code(orig) -> Optional[str]:
    for attr in ("sqlstate", "pgcode", "sqlite_errorname"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    # sqlite3 on interpreters older than 3.11 has no sqlite_errorname
    if "UNIQUE constraint failed" in str(orig):
        return "SQLITE_CONSTRAINT_UNIQUE"
    return None


def to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return DatabaseError(str(exc.orig), _native_error_code(exc.orig))
    return DatabaseError(str(exc))


# =====================================================
# EXECUTOR
# =====================================================
@dataclass
class QueryResult:
    rows: list = field(default_factory=list)
    rowcount: int = 0

    def first(self) -> Optional[dict]:
        return self.rows[0] if self.rows else None

    def scalar(self) -> Any:
        row = self.first()
        if row is None:
            return None
        return next(iter(row.values()), None)


class QueryExecutor:
    """Runs statements on one pooled connection."""

    def __init__(self, conn: AsyncConnection):
        self._conn = conn

    async def execute(self, statement, params: Optional[dict] = None) -> QueryResult:
        if isinstance(statement, str):
            statement = text(statement)

        start = time.perf_counter()
        try:
            if params:
                result = await self._conn.execute(statement, params)
            else:
                result = await self._conn.execute(statement)

            if result.returns_rows:
                rows = [dict(r) for r in result.mappings().all()]
                rowcount = len(rows)
            else:
                rows = []
                rowcount = result.rowcount

        except SQLAlchemyError as exc:
            error = to_database_error(exc)
            logger.error("Query failed | code=%s | %s", error.code, error.message)
            raise error from exc

        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug("Query OK | duration_ms=%.2f | rows=%s", duration_ms, rowcount)

        return QueryResult(rows=rows, rowcount=rowcount)


class Database:
    """Explicit handle over the connection pool.

    Built once per application in the lifespan and handed to services
    through the ``get_db`` dependency.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @classmethod
    def from_url(cls, url=DATABASE_URL) -> "Database":
        return cls(create_db_engine(url))

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[QueryExecutor]:
        # commit on clean exit, rollback on any exception
        try:
            async with self.engine.begin() as conn:
                yield QueryExecutor(conn)
        except SQLAlchemyError as exc:
            error = to_database_error(exc)
            logger.error("Transaction failed | code=%s | %s", error.code, error.message)
            raise error from exc
        # asyncpg connect failures (refused, unreachable, timeout) are not
        # wrapped by SQLAlchemy
        except (OSError, asyncio.TimeoutError) as exc:
            error = DatabaseError(str(exc) or type(exc).__name__)
            logger.error("Database unreachable | %s", error.message)
            raise error from exc

    async def execute(self, statement, params: Optional[dict] = None) -> QueryResult:
        async with self.transaction() as tx:
            return await tx.execute(statement, params)

    async def ping(self) -> None:
        await self.execute("SELECT 1")

    async def dispose(self) -> None:
        await self.engine.dispose()


# =====================================================
# DEPENDENCY
# =====================================================
def get_db(request: Request) -> Database:
    return request.app.state.db


# =====================================================
# MODEL IMPORT
# =====================================================
import app.models  # noqa


# =====================================================
# DEV ONLY: AUTO CREATE TABLES
# =====================================================
async def init_models(db: Database):
    if APP_ENV != "development":
        raise RuntimeError("init_models() is forbidden outside development")

    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
