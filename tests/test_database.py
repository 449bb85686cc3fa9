"""Tests for the query executor."""

import asyncio

from sqlalchemy import select, text, update

from folio.database import QueryExecutor
from folio.models import Domain, User


def test_orm_column_select_returns_rows(executor, seed):
    """Selects on mapped attributes come back as plain dict rows."""
    owner = seed.user(email="owner@acme.com")
    seed.domain(owner, "acme.local")
    result = asyncio.run(executor.execute(select(Domain.user_id, Domain.name).where(Domain.status == 1)))
    assert result.success
    assert result.rows == [{"user_id": owner, "name": "acme.local"}]
    assert result.first["user_id"] == owner


def test_text_select_returns_rows(executor):
    result = asyncio.run(executor.execute(text("SELECT 1 AS one")))
    assert result.rows == [{"one": 1}]


def test_dml_returns_rowcount(executor, seed):
    seed.user(email="a@example.com")
    seed.user(email="b@example.com")
    result = asyncio.run(executor.execute(update(User).values(full_name="Renamed")))
    assert result.success
    assert result.data == 2
    assert result.rows == []


def test_storage_error_is_reported_not_raised(executor):
    result = asyncio.run(executor.execute(text("SELECT * FROM no_such_table")))
    assert not result.success
    assert "no_such_table" in result.error


def test_unexpected_error_is_reported_not_raised():
    def broken_session_maker():
        raise RuntimeError("pool exhausted")

    result = asyncio.run(QueryExecutor(broken_session_maker).execute(text("SELECT 1")))
    assert not result.success
    assert result.error == "pool exhausted"


def test_execute_many_is_one_transaction(executor, seed):
    owner = seed.user(email="a@example.com")
    result = asyncio.run(
        executor.execute_many(
            [
                update(User).where(User.id == owner).values(full_name="Changed"),
                text("INSERT INTO no_such_table VALUES (1)"),
            ]
        )
    )
    assert not result.success
    rows = asyncio.run(executor.execute(select(User.full_name).where(User.id == owner))).rows
    assert rows == [{"full_name": None}]
