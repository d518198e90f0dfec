"""
Shared fixtures: an in-memory SQLite database, an in-process Redis double
and an HTTP client bound to a freshly built app.
"""

from datetime import date
from typing import Dict, Optional

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from ceialmilk.core.cache import FazendaCache
from ceialmilk.core.security import create_access_token, get_password_hash
from ceialmilk.database import build_session_factory
from ceialmilk.main import create_app
from ceialmilk.models import Base, Fazenda, Usuario

ADMIN_EMAIL = "admin@ceialmilk.com"
ADMIN_PASSWORD = "password"


class InMemoryRedis:
    """Subset of redis.asyncio.Redis used by FazendaCache."""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.ttls: Dict[str, Optional[int]] = {}
        self.get_calls = 0

    async def get(self, key):
        self.get_calls += 1
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    async def aclose(self):
        pass


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def redis_client():
    return InMemoryRedis()


@pytest.fixture
def fazenda_cache(redis_client):
    return FazendaCache(redis_client, ttl_seconds=3600)


@pytest.fixture
def app(session_factory, fazenda_cache):
    return create_app(session_factory=session_factory, fazenda_cache=fazenda_cache)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_user(session_factory):
    async with session_factory() as session:
        user = Usuario(
            nome="Administrador",
            email=ADMIN_EMAIL,
            senha=get_password_hash(ADMIN_PASSWORD),
            perfil="ADMIN",
            enabled=True,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest.fixture
def auth_headers():
    token = create_access_token(subject=ADMIN_EMAIL, authorities=["ROLE_ADMIN"])
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def sample_fazendas(session_factory):
    """Four fazendas with cattle counts 10, 50, 100 and 200."""
    rows = [
        Fazenda(nome="Fazenda Boa Vista", localizacao="Juiz de Fora - MG", quantidade_vacas=10,
                fundacao=date(1990, 5, 1)),
        Fazenda(nome="Sitio Santa Luzia", localizacao="Lavras - MG", quantidade_vacas=50),
        Fazenda(nome="Fazenda Esperanca", localizacao="Ribeirao Preto - SP", quantidade_vacas=100),
        Fazenda(nome="Estancia Sul", localizacao="Bage - RS", quantidade_vacas=200),
    ]
    async with session_factory() as session:
        session.add_all(rows)
        await session.commit()
        for row in rows:
            await session.refresh(row)
    return rows
