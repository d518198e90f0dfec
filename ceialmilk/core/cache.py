"""
Redis cache for single fazenda responses.

Only lookups by id go through here. Entries expire after the configured TTL
and are evicted explicitly when the fazenda is updated.
"""

import logging
from typing import Optional

import redis.asyncio as redis

from ceialmilk.config import settings
from ceialmilk.modules.fazendas.schemas import FazendaResponse

logger = logging.getLogger(__name__)

KEY_PREFIX = "fazenda::"


def build_redis_client(url: Optional[str] = None) -> redis.Redis:
    return redis.from_url(url or settings.REDIS_URL, decode_responses=True)


class FazendaCache:
    def __init__(self, client: redis.Redis, ttl_seconds: int = None):
        self.client = client
        self.ttl_seconds = ttl_seconds or settings.CACHE_TTL_SECONDS

    @staticmethod
    def key(fazenda_id: int) -> str:
        return f"{KEY_PREFIX}{fazenda_id}"

    async def get(self, fazenda_id: int) -> Optional[FazendaResponse]:
        raw = await self.client.get(self.key(fazenda_id))
        if raw is None:
            logger.debug(f"Cache miss for fazenda {fazenda_id}")
            return None
        logger.debug(f"Cache hit for fazenda {fazenda_id}")
        return FazendaResponse.model_validate_json(raw)

    async def put(self, fazenda: FazendaResponse) -> None:
        await self.client.set(
            self.key(fazenda.id),
            fazenda.model_dump_json(),
            ex=self.ttl_seconds,
        )

    async def evict(self, fazenda_id: int) -> None:
        await self.client.delete(self.key(fazenda_id))

    async def close(self) -> None:
        await self.client.aclose()
