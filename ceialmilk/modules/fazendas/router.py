from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ceialmilk.core.cache import FazendaCache
from ceialmilk.core.security import get_current_principal
from ceialmilk.database import get_db
from ceialmilk.modules.fazendas.repository import FazendaRepository
from . import schemas, services

router = APIRouter(
    prefix="/api/v1/fazendas",
    tags=["Fazendas"],
    dependencies=[Depends(get_current_principal)],
)


def get_fazenda_cache(request: Request) -> Optional[FazendaCache]:
    return request.app.state.fazenda_cache


def get_fazenda_service(
    db: AsyncSession = Depends(get_db),
    cache: Optional[FazendaCache] = Depends(get_fazenda_cache),
) -> services.FazendaService:
    return services.FazendaService(FazendaRepository(db), cache)


@router.get("", response_model=schemas.FazendaPage)
async def list_fazendas(
    page: int = Query(0, ge=0, le=schemas.MAX_INT),
    size: Optional[int] = Query(None, ge=1, le=schemas.MAX_INT),
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    """
    List fazendas ordered by id.

    - **page**: zero-based page index
    - **size**: page size; omit to get every record in one page
    """
    return await fazenda_service.list_fazendas(page=page, size=size)


@router.post("", response_model=schemas.FazendaResponse, status_code=status.HTTP_201_CREATED)
async def create_fazenda(
    fazenda: schemas.FazendaCreate,
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    return await fazenda_service.create_fazenda(fazenda)


@router.get("/count", response_model=int)
async def count_fazendas(fazenda_service: services.FazendaService = Depends(get_fazenda_service)):
    return await fazenda_service.count()


@router.get("/exists", response_model=bool)
async def fazenda_exists(
    nome: str,
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    return await fazenda_service.exists_by_nome(nome)


@router.get(
    "/search/by-nome",
    response_model=schemas.FazendaResponse,
    responses={204: {"description": "No fazenda with that name"}},
)
async def search_by_nome(
    nome: str,
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    fazenda = await fazenda_service.find_by_nome(nome)
    if fazenda is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return fazenda


@router.get("/search/by-localizacao", response_model=List[schemas.FazendaResponse])
async def search_by_localizacao(
    localizacao: str,
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    return await fazenda_service.find_by_localizacao(localizacao)


@router.get("/search/by-vacas-min", response_model=List[schemas.FazendaResponse])
async def search_by_vacas_min(
    quantidade: int = Query(..., ge=schemas.MIN_INT, le=schemas.MAX_INT),
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    return await fazenda_service.find_by_quantidade_vacas_minima(quantidade)


@router.get("/search/by-vacas-range", response_model=List[schemas.FazendaResponse])
async def search_by_vacas_range(
    min_vacas: int = Query(..., alias="min", ge=schemas.MIN_INT, le=schemas.MAX_INT),
    max_vacas: int = Query(..., alias="max", ge=schemas.MIN_INT, le=schemas.MAX_INT),
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    """Fazendas whose cattle count lies in [min, max], both bounds included."""
    return await fazenda_service.find_by_quantidade_vacas_range(min_vacas, max_vacas)


@router.get(
    "/{fazenda_id}",
    response_model=schemas.FazendaResponse,
    responses={204: {"description": "Fazenda not found"}},
)
async def get_fazenda(
    fazenda_id: int = Path(..., ge=schemas.MIN_INT, le=schemas.MAX_INT),
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    fazenda = await fazenda_service.get_fazenda(fazenda_id)
    if fazenda is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return fazenda


@router.put(
    "/{fazenda_id}",
    response_model=schemas.FazendaResponse,
    responses={204: {"description": "Fazenda not found"}},
)
async def update_fazenda(
    fazenda: schemas.FazendaUpdate,
    fazenda_id: int = Path(..., ge=schemas.MIN_INT, le=schemas.MAX_INT),
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    updated = await fazenda_service.update_fazenda(fazenda_id, fazenda)
    if updated is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return updated


@router.delete("/{fazenda_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fazenda(
    fazenda_id: int = Path(..., ge=schemas.MIN_INT, le=schemas.MAX_INT),
    fazenda_service: services.FazendaService = Depends(get_fazenda_service),
):
    await fazenda_service.delete_fazenda(fazenda_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
