from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

# Columns are 32-bit INTEGER
MIN_INT = -2**31
MAX_INT = 2**31 - 1


class FazendaCreate(BaseModel):
    nome: str = Field(..., examples=["Fazenda Boa Vista"])
    localizacao: Optional[str] = Field(None, examples=["Juiz de Fora - MG"])
    quantidade_vacas: Optional[int] = Field(None, ge=0, le=MAX_INT)
    fundacao: Optional[date] = None

    @field_validator("nome")
    @classmethod
    def nome_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Nome é obrigatório")
        return v.strip()


class FazendaUpdate(BaseModel):
    """
    Sparse update: None or a blank string leaves the stored value untouched.
    There is no way to clear a field through this payload.
    """
    nome: Optional[str] = None
    localizacao: Optional[str] = None
    quantidade_vacas: Optional[int] = Field(None, ge=0, le=MAX_INT)
    fundacao: Optional[date] = None

    def changes(self) -> dict:
        """Fields that should overwrite the stored record."""
        result = {}
        for name, value in self.model_dump().items():
            if value is None:
                continue
            if isinstance(value, str):
                if not value.strip():
                    continue
                value = value.strip()
            result[name] = value
        return result


class FazendaResponse(BaseModel):
    id: int
    nome: str
    localizacao: Optional[str] = None
    quantidade_vacas: int
    fundacao: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FazendaPage(BaseModel):
    content: List[FazendaResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int
