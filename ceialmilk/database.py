import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import exc
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ceialmilk.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str = None) -> AsyncEngine:
    return create_async_engine(url or settings.DATABASE_URL, echo=False)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Dependency Injection
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request from the factory owned by the app."""
    factory = request.app.state.session_factory
    async with factory() as session:
        try:
            yield session
        except exc.SQLAlchemyError:
            logger.exception("Database error, rolling back session")
            await session.rollback()
            raise
