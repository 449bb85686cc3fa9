"""Database connection, pooling and query execution."""

import asyncio
import logging
import ssl
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import Executable

from folio.config import settings

logger = logging.getLogger(__name__)


def _make_ssl_context_for_supabase():
    """SSL context for Supabase - disables cert verification to avoid macOS chain issues."""
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


def get_engine_url_and_connect_args(database_url: str):
    """Strip sslmode from URL (asyncpg doesn't accept it) and add SSL via connect_args for Supabase."""
    url = database_url
    connect_args = {}
    if "sslmode=" in url or "ssl=" in url:
        parsed = urlparse(url)
        query = parse_qs(parsed.query)
        query.pop("sslmode", None)
        query.pop("ssl", None)
        new_query = urlencode(query, doseq=True)
        url = urlunparse(parsed._replace(query=new_query))
        if "supabase" in database_url:
            connect_args["ssl"] = _make_ssl_context_for_supabase()
    return url, connect_args


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def build_engine(database_url: str) -> AsyncEngine:
    """Create the pooled async engine; the pool bounds concurrent connections."""
    url, connect_args = get_engine_url_and_connect_args(database_url)
    return create_async_engine(
        url,
        echo=settings.log_level == "DEBUG",
        connect_args=connect_args,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
    )


engine = build_engine(settings.database_url)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


@dataclass
class QueryResult:
    """Outcome of a single statement: rows (or rowcount) on success, an error message otherwise."""

    success: bool
    data: Any = None
    error: str | None = None

    @property
    def rows(self) -> list[dict]:
        if self.success and isinstance(self.data, list):
            return self.data
        return []

    @property
    def first(self) -> dict | None:
        rows = self.rows
        return rows[0] if rows else None


class QueryExecutor:
    """
    Runs parameterized statements against the pool and never raises.

    Each call checks a connection out for the duration of one statement (or one
    transaction for execute_many); the session context guarantees it is returned
    to the pool on every path, including failures.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def execute(self, statement: Executable) -> QueryResult:
        try:
            async with self._session_maker() as session:
                result = await session.execute(statement)
                data = _collect(statement, result)
                await session.commit()
            return QueryResult(success=True, data=data)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
            logger.error("Database query error: %s", exc)
            return QueryResult(success=False, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error running query")
            return QueryResult(success=False, error=str(exc))

    async def execute_many(self, statements: list[Executable]) -> QueryResult:
        """Run statements in one transaction; rolled back as a whole on failure."""
        try:
            async with self._session_maker() as session:
                async with session.begin():
                    results = []
                    for statement in statements:
                        results.append(_collect(statement, await session.execute(statement)))
            return QueryResult(success=True, data=results)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
            logger.error("Transaction error: %s", exc)
            return QueryResult(success=False, error=str(exc))
        except Exception as exc:
            logger.exception("Unexpected error running transaction")
            return QueryResult(success=False, error=str(exc))


def _collect(statement: Executable, result) -> Any:
    # INSERT/UPDATE/DELETE (no RETURNING is ever used) report their rowcount
    if getattr(statement, "is_dml", False):
        return result.rowcount
    return [dict(row) for row in result.mappings().all()]


executor = QueryExecutor(async_session_maker)
