import logging
import math
from typing import List, Optional

from ceialmilk.core.cache import FazendaCache
from ceialmilk.models import Fazenda
from ceialmilk.modules.fazendas.repository import FazendaRepository
from . import schemas

logger = logging.getLogger(__name__)


class FazendaService:
    def __init__(self, repository: FazendaRepository, cache: Optional[FazendaCache] = None):
        self.repository = repository
        self.cache = cache

    @staticmethod
    def to_response(fazenda: Fazenda) -> schemas.FazendaResponse:
        return schemas.FazendaResponse.model_validate(fazenda)

    def _to_responses(self, fazendas: List[Fazenda]) -> List[schemas.FazendaResponse]:
        return [self.to_response(f) for f in fazendas]

    async def list_fazendas(self, page: int = 0, size: Optional[int] = None) -> schemas.FazendaPage:
        total = await self.repository.count()
        if size is None:
            fazendas = await self.repository.find_all()
            page, size = 0, len(fazendas)
        else:
            fazendas = await self.repository.find_all(offset=page * size, limit=size)
        total_pages = math.ceil(total / size) if size else (1 if total else 0)
        return schemas.FazendaPage(
            content=self._to_responses(fazendas),
            page=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
        )

    async def get_fazenda(self, fazenda_id: int) -> Optional[schemas.FazendaResponse]:
        if self.cache is not None:
            cached = await self.cache.get(fazenda_id)
            if cached is not None:
                return cached

        fazenda = await self.repository.find_by_id(fazenda_id)
        if fazenda is None:
            return None

        response = self.to_response(fazenda)
        if self.cache is not None:
            await self.cache.put(response)
        return response

    async def create_fazenda(self, data: schemas.FazendaCreate) -> schemas.FazendaResponse:
        fazenda = Fazenda(
            nome=data.nome,
            localizacao=data.localizacao,
            quantidade_vacas=data.quantidade_vacas if data.quantidade_vacas is not None else 0,
            fundacao=data.fundacao,
        )
        fazenda = await self.repository.save(fazenda)
        logger.info(f"Fazenda {fazenda.id} created")
        return self.to_response(fazenda)

    async def update_fazenda(
        self, fazenda_id: int, data: schemas.FazendaUpdate
    ) -> Optional[schemas.FazendaResponse]:
        """Overwrite only the fields present in the payload. None when the id is unknown."""
        fazenda = await self.repository.find_by_id(fazenda_id)
        if fazenda is None:
            return None

        for field_name, value in data.changes().items():
            setattr(fazenda, field_name, value)
        fazenda = await self.repository.save(fazenda)

        if self.cache is not None:
            await self.cache.evict(fazenda_id)
        logger.info(f"Fazenda {fazenda_id} updated")
        return self.to_response(fazenda)

    async def delete_fazenda(self, fazenda_id: int) -> None:
        await self.repository.delete_by_id(fazenda_id)
        logger.info(f"Fazenda {fazenda_id} deleted")

    async def find_by_nome(self, nome: str) -> Optional[schemas.FazendaResponse]:
        fazenda = await self.repository.find_by_nome_ignore_case(nome)
        return self.to_response(fazenda) if fazenda else None

    async def find_by_localizacao(self, localizacao: str) -> List[schemas.FazendaResponse]:
        return self._to_responses(await self.repository.find_by_localizacao_containing(localizacao))

    async def find_by_quantidade_vacas_minima(self, quantidade: int) -> List[schemas.FazendaResponse]:
        return self._to_responses(await self.repository.find_by_quantidade_vacas_min(quantidade))

    async def find_by_quantidade_vacas_range(self, min_vacas: int, max_vacas: int) -> List[schemas.FazendaResponse]:
        return self._to_responses(
            await self.repository.find_by_quantidade_vacas_between(min_vacas, max_vacas)
        )

    async def exists_by_nome(self, nome: str) -> bool:
        return await self.repository.exists_by_nome_ignore_case(nome)

    async def count(self) -> int:
        return await self.repository.count()
