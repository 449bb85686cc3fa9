"""Shared fixtures: a throwaway SQLite database, row seeding and token minting."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from folio.database import Base, QueryExecutor
from folio.models import Domain, User

JWT_SECRET = "folio-test-secret-0123456789abcdef"


class Seeder:
    """Inserts rows through the ORM, filling ids and timestamps."""

    def __init__(self, session_maker):
        self._session_maker = session_maker

    def add(self, model, **values) -> dict:
        values.setdefault("id", str(uuid4()))
        now = datetime.now(timezone.utc)
        for column in ("created_at", "updated_at"):
            if column in model.__table__.c:
                values.setdefault(column, now)
        asyncio.run(self._insert(model(**values)))
        return values

    async def _insert(self, row) -> None:
        async with self._session_maker() as session:
            session.add(row)
            await session.commit()

    def user(self, email: str | None = None, **values) -> str:
        email = email or f"{uuid4().hex[:8]}@example.com"
        return self.add(User, email=email, **values)["id"]

    def domain(self, user_id: str, name: str, status: int = 1, **values) -> dict:
        return self.add(Domain, user_id=user_id, name=name, status=status, **values)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'folio.db'}"


@pytest.fixture
def session_maker(db_url):
    # NullPool: no connection outlives the event loop that opened it
    engine = create_async_engine(db_url, poolclass=NullPool)

    async def create_schema():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_schema())
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    asyncio.run(engine.dispose())


@pytest.fixture
def executor(session_maker):
    return QueryExecutor(session_maker)


@pytest.fixture
def seed(session_maker):
    return Seeder(session_maker)


@pytest.fixture
def jwt_secret():
    return JWT_SECRET


@pytest.fixture
def make_token():
    def _make(tenant_id=None, secret=JWT_SECRET, expires_in=timedelta(hours=1), **claims):
        payload = {"exp": datetime.now(timezone.utc) + expires_in, **claims}
        if tenant_id is not None:
            payload["id"] = tenant_id
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token):
    def _headers(tenant_id: str) -> dict:
        return {"Authorization": f"Bearer {make_token(tenant_id)}"}

    return _headers
