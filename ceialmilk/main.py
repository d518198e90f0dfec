import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import async_sessionmaker

from ceialmilk.config import settings
from ceialmilk.core.cache import FazendaCache, build_redis_client
from ceialmilk.database import build_engine, build_session_factory
from ceialmilk.modules.auth import router as auth_router
from ceialmilk.modules.fazendas import router as fazendas_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    session_factory: Optional[async_sessionmaker] = None,
    fazenda_cache: Optional[FazendaCache] = None,
) -> FastAPI:
    """
    Build the API with its collaborators passed in explicitly.

    Anything not injected is created from settings when the app starts
    and released when it stops.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        owns_cache = False
        if app.state.session_factory is None:
            engine = build_engine()
            app.state.session_factory = build_session_factory(engine)
            logger.info("Database engine ready")
        if app.state.fazenda_cache is None and settings.cache_enabled:
            app.state.fazenda_cache = FazendaCache(build_redis_client())
            owns_cache = True
            logger.info("Redis cache enabled for fazendas")
        yield
        if owns_cache:
            await app.state.fazenda_cache.close()
        if engine is not None:
            await engine.dispose()

    app = FastAPI(title="CeialMilk API", version=settings.PROJECT_VERSION, lifespan=lifespan)
    app.state.session_factory = session_factory
    app.state.fazenda_cache = fazenda_cache

    # Register Modules
    app.include_router(auth_router.router)
    app.include_router(fazendas_router.router)

    @app.get("/")
    def root():
        return {"message": "System is Online. Use /docs for Swagger UI"}

    return app


app = create_app()
