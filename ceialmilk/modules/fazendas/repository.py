from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ceialmilk.models import Fazenda

LIKE_ESCAPE = "/"


def _escape_like(value: str) -> str:
    """Make % and _ match literally inside a LIKE pattern."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class FazendaRepository:
    """Queries over the fazendas table. Every method is one round trip."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self, offset: int = 0, limit: Optional[int] = None) -> List[Fazenda]:
        query = select(Fazenda).order_by(Fazenda.id).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_by_id(self, fazenda_id: int) -> Optional[Fazenda]:
        return await self.db.get(Fazenda, fazenda_id)

    async def save(self, fazenda: Fazenda) -> Fazenda:
        self.db.add(fazenda)
        await self.db.commit()
        await self.db.refresh(fazenda)
        return fazenda

    async def delete_by_id(self, fazenda_id: int) -> None:
        await self.db.execute(delete(Fazenda).where(Fazenda.id == fazenda_id))
        await self.db.commit()

    async def find_by_nome_ignore_case(self, nome: str) -> Optional[Fazenda]:
        query = (
            select(Fazenda)
            .where(func.lower(Fazenda.nome) == func.lower(nome))
            .order_by(Fazenda.id)
            .limit(1)
        )
        result = await self.db.execute(query)
        return result.scalars().first()

    async def find_by_localizacao_containing(self, localizacao: str) -> List[Fazenda]:
        pattern = f"%{_escape_like(localizacao)}%"
        query = (
            select(Fazenda)
            .where(func.lower(Fazenda.localizacao).like(func.lower(pattern), escape=LIKE_ESCAPE))
            .order_by(Fazenda.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_by_quantidade_vacas_min(self, quantidade: int) -> List[Fazenda]:
        query = (
            select(Fazenda)
            .where(Fazenda.quantidade_vacas >= quantidade)
            .order_by(Fazenda.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_by_quantidade_vacas_between(self, min_vacas: int, max_vacas: int) -> List[Fazenda]:
        # BETWEEN is inclusive on both ends
        query = (
            select(Fazenda)
            .where(Fazenda.quantidade_vacas.between(min_vacas, max_vacas))
            .order_by(Fazenda.id)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def exists_by_nome_ignore_case(self, nome: str) -> bool:
        query = select(
            select(Fazenda.id).where(func.lower(Fazenda.nome) == func.lower(nome)).exists()
        )
        result = await self.db.execute(query)
        return bool(result.scalar())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Fazenda.id)))
        return result.scalar_one()
