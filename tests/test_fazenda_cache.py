"""Get-by-id caching and invalidation on update."""

import json

import pytest
import pytest_asyncio

from ceialmilk.core.cache import FazendaCache
from ceialmilk.modules.fazendas import schemas
from ceialmilk.modules.fazendas.repository import FazendaRepository
from ceialmilk.modules.fazendas.services import FazendaService


@pytest_asyncio.fixture
async def service(db_session, fazenda_cache):
    return FazendaService(FazendaRepository(db_session), fazenda_cache)


@pytest.mark.asyncio
async def test_first_read_populates_cache_with_ttl(service, redis_client, sample_fazendas):
    target = sample_fazendas[0]

    response = await service.get_fazenda(target.id)

    key = f"fazenda::{target.id}"
    assert key in redis_client.store
    assert redis_client.ttls[key] == 3600
    assert json.loads(redis_client.store[key])["nome"] == response.nome


@pytest.mark.asyncio
async def test_consecutive_reads_are_identical(service, sample_fazendas):
    target = sample_fazendas[1]

    first = await service.get_fazenda(target.id)
    second = await service.get_fazenda(target.id)

    assert first == second


@pytest.mark.asyncio
async def test_cached_value_is_served_without_database(service, redis_client, sample_fazendas):
    target = sample_fazendas[0]
    stale = schemas.FazendaResponse(id=target.id, nome="Do cache", quantidade_vacas=1)
    await FazendaCache(redis_client).put(stale)

    response = await service.get_fazenda(target.id)

    assert response.nome == "Do cache"


@pytest.mark.asyncio
async def test_update_evicts_and_next_read_is_fresh(service, redis_client, sample_fazendas):
    target = sample_fazendas[2]
    await service.get_fazenda(target.id)

    await service.update_fazenda(target.id, schemas.FazendaUpdate(nome="Fazenda Renomeada"))

    assert f"fazenda::{target.id}" not in redis_client.store
    fresh = await service.get_fazenda(target.id)
    assert fresh.nome == "Fazenda Renomeada"
    assert fresh.quantidade_vacas == 100


@pytest.mark.asyncio
async def test_missing_id_is_not_cached(service, redis_client):
    assert await service.get_fazenda(777) is None
    assert redis_client.store == {}


@pytest.mark.asyncio
async def test_update_of_missing_id_leaves_cache_alone(service, redis_client, sample_fazendas):
    await service.get_fazenda(sample_fazendas[0].id)

    assert await service.update_fazenda(999, schemas.FazendaUpdate(nome="X")) is None
    assert f"fazenda::{sample_fazendas[0].id}" in redis_client.store


@pytest.mark.asyncio
async def test_list_and_search_do_not_touch_cache(service, redis_client, sample_fazendas):
    await service.list_fazendas()
    await service.find_by_localizacao("MG")
    await service.find_by_quantidade_vacas_range(0, 1000)

    assert redis_client.get_calls == 0
    assert redis_client.store == {}


@pytest.mark.asyncio
async def test_service_works_without_cache(db_session, sample_fazendas):
    service = FazendaService(FazendaRepository(db_session))

    response = await service.get_fazenda(sample_fazendas[3].id)
    updated = await service.update_fazenda(sample_fazendas[3].id, schemas.FazendaUpdate(quantidade_vacas=0))

    assert response.nome == "Estancia Sul"
    assert updated.quantidade_vacas == 0


@pytest.mark.asyncio
async def test_get_update_get_over_http(client, auth_headers, sample_fazendas):
    target = sample_fazendas[0]
    url = f"/api/v1/fazendas/{target.id}"

    first = await client.get(url, headers=auth_headers)
    second = await client.get(url, headers=auth_headers)
    assert first.json() == second.json()

    await client.put(url, json={"localizacao": "Barbacena - MG"}, headers=auth_headers)
    third = await client.get(url, headers=auth_headers)

    assert third.json()["localizacao"] == "Barbacena - MG"
    assert third.json()["nome"] == first.json()["nome"]


def test_cache_key_format():
    assert FazendaCache.key(7) == "fazenda::7"
