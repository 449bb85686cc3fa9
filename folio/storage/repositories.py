"""Tenant-scoped statement builders and tenant/domain lookups."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.sql import ColumnElement

from folio.database import QueryExecutor
from folio.errors import StorageFailure
from folio.models import Domain, User
from folio.tenancy.cache import StoreConfig

logger = logging.getLogger(__name__)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


@dataclass(frozen=True)
class DomainBinding:
    id: str
    user_id: str
    name: str
    status: int


async def find_domain_binding(executor: QueryExecutor, variant: str) -> DomainBinding | None:
    """
    Enabled binding whose stored name contains ``variant`` (case-insensitive).

    The shortest matching name wins so the tightest binding is preferred.
    Storage failures are logged and reported as "no binding".
    """
    statement = (
        select(Domain.id, Domain.user_id, Domain.name, Domain.status)
        .where(Domain.name.icontains(variant, autoescape=True))
        .where(Domain.status == 1)
        .order_by(func.length(Domain.name), Domain.name)
        .limit(1)
    )
    result = await executor.execute(statement)
    if not result.success:
        logger.warning("Domain lookup failed for %r", variant)
        return None
    row = result.first
    if row is None:
        return None
    return DomainBinding(
        id=row["id"], user_id=row["user_id"], name=row["name"], status=int(row["status"])
    )


async def find_user_id_by_email(executor: QueryExecutor, email: str) -> str | None:
    if not email:
        return None
    result = await executor.execute(select(User.id).where(User.email == email))
    row = result.first
    return row["id"] if row else None


_PUBLIC_USER_COLUMNS = (
    User.id,
    User.email,
    User.name,
    User.full_name,
    User.avatar_url,
    User.email_verified,
)


async def find_user_by_id(executor: QueryExecutor, user_id: str) -> dict | None:
    result = await executor.execute(select(*_PUBLIC_USER_COLUMNS).where(User.id == user_id))
    if not result.success:
        raise StorageFailure(result.error or "user lookup failed")
    return result.first


async def find_user_by_exact_domain(executor: QueryExecutor, domain: str) -> dict | None:
    """Public profile of the tenant bound to exactly ``domain`` (enabled bindings only)."""
    statement = (
        select(*_PUBLIC_USER_COLUMNS)
        .join(Domain, Domain.user_id == User.id)
        .where(Domain.name == domain, Domain.status == 1)
        .limit(1)
    )
    result = await executor.execute(statement)
    if not result.success:
        raise StorageFailure(result.error or "user lookup failed")
    return result.first


async def find_store_config(executor: QueryExecutor, domain: str) -> StoreConfig | None:
    """Custom object-store config of an enabled binding, None when it has none."""
    statement = (
        select(Domain.supabase_url, Domain.supabase_anon_key)
        .where(Domain.name.icontains(domain, autoescape=True))
        .where(Domain.status == 1)
        .order_by(func.length(Domain.name))
        .limit(1)
    )
    result = await executor.execute(statement)
    if not result.success:
        raise StorageFailure(result.error or "store config lookup failed")
    row = result.first
    if row is None:
        return None
    url = (row["supabase_url"] or "").strip()
    key = (row["supabase_anon_key"] or "").strip()
    if not url or not key:
        return None
    return StoreConfig(url=url, anon_key=key, is_custom=True)


def select_scoped(
    table: Table,
    tenant_id: str,
    order_by: list[ColumnElement] | tuple = (),
    where: list[ColumnElement] | tuple = (),
    limit: int | None = None,
):
    """SELECT * FROM table WHERE user_id = :tenant [AND ...] ORDER BY ..."""
    statement = select(table).where(table.c.user_id == tenant_id, *where).order_by(*order_by)
    if limit is not None:
        statement = statement.limit(limit)
    return statement


def select_owned(table: Table, entity_id: str, tenant_id: str):
    return select(table).where(table.c.id == entity_id, table.c.user_id == tenant_id)


def insert_row(table: Table, values: dict[str, Any]):
    return insert(table).values(**values)


def update_owned(table: Table, entity_id: str, tenant_id: str, values: dict[str, Any]):
    return (
        update(table)
        .where(table.c.id == entity_id, table.c.user_id == tenant_id)
        .values(**values)
    )


def delete_owned(table: Table, entity_id: str, tenant_id: str):
    return delete(table).where(table.c.id == entity_id, table.c.user_id == tenant_id)


def delete_scoped(table: Table, tenant_id: str, *where: ColumnElement):
    """DELETE FROM table WHERE user_id = :tenant AND ..."""
    return delete(table).where(table.c.user_id == tenant_id, *where)
