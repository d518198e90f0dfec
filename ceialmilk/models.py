"""
SQLAlchemy models for the fazenda and usuario tables.
Both aggregates are independent: no foreign keys, no relationships.
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Usuario(Base):
    """User model for authentication. Email is the login identity."""
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    senha = Column(String(255), nullable=False)  # bcrypt hash
    perfil = Column(String(50), nullable=False, default="USER")
    enabled = Column(Boolean, nullable=True, default=True)

    @property
    def is_enabled(self) -> bool:
        """NULL in the enabled column counts as enabled."""
        return self.enabled if self.enabled is not None else True

    def __repr__(self):
        return f"<Usuario(id={self.id}, email={self.email})>"


class Fazenda(Base):
    """Dairy farm record."""
    __tablename__ = "fazendas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(255), nullable=False, index=True)
    localizacao = Column(String(255), nullable=True)
    quantidade_vacas = Column(Integer, nullable=False, default=0)
    fundacao = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Fazenda(id={self.id}, nome={self.nome})>"
