import logging

from redis import asyncio as aioredis

from app.core.config import settings

logger = logging.getLogger(__name__)


class RedisClient:
    def __init__(self, url: str | None = None, password: str | None = None):
        self._url = url or settings.REDIS_URL
        self._password = password if password is not None else settings.REDIS_PASSWORD
        self._client: aioredis.Redis | None = None

    @property
    def client(self) -> aioredis.Redis:
        if self._client is None:
            self._client = aioredis.from_url(
                self._url,
                password=self._password or None,
                decode_responses=True,
            )
        return self._client

    async def get(self, key: str) -> str | None:
        return await self.client.get(key)

    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        await self.client.set(key, value, ex=ttl)

    async def delete(self, key: str) -> None:
        await self.client.delete(key)

    async def incrby(self, key: str, amount: int) -> int:
        return await self.client.incrby(key, amount)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")


redis_client = RedisClient()
