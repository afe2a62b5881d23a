"""
Двухуровневый кэш геокодинга.

- GeocodeCache: быстрый уровень в памяти процесса, без срока жизни
- RedisGeocodeCache: долговременный уровень, ключ geocode:<name>, срок 30 дней

Ошибки Redis превращаются в CacheUnavailableError, сервис считает их промахом.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from loguru import logger
from pydantic import ValidationError
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import GEOCODE_CACHE_PREFIX, GEOCODE_CACHE_TTL
from src.geocoding.exceptions import CacheUnavailableError
from src.geocoding.models import GeocodeResult


class GeocodeCache:
    """Кэш в памяти: имя аэропорта -> координаты."""

    def __init__(self):
        self._entries: Dict[str, GeocodeResult] = {}

    def get(self, name: str) -> Optional[GeocodeResult]:
        return self._entries.get(name)

    def set(self, name: str, result: GeocodeResult):
        self._entries[name] = result

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class IDurableGeocodeCache(ABC):
    """Интерфейс долговременного кэша."""

    @abstractmethod
    async def get(self, name: str) -> Optional[GeocodeResult]:
        """None при промахе. CacheUnavailableError если хранилище недоступно."""
        pass

    @abstractmethod
    async def set(self, name: str, result: GeocodeResult):
        pass

    @abstractmethod
    async def close(self):
        pass


class RedisGeocodeCache(IDurableGeocodeCache):
    """
    Долговременный кэш в Redis.

    Значение - JSON {"lat": .., "lng": ..}, ключ - <prefix><name>.
    """

    def __init__(
        self,
        client: aioredis.Redis,
        prefix: str = GEOCODE_CACHE_PREFIX,
        ttl: int = GEOCODE_CACHE_TTL
    ):
        self.client = client
        self.prefix = prefix
        self.ttl = ttl

    @classmethod
    def from_url(cls, url: str) -> "RedisGeocodeCache":
        logger.debug("[RedisGeocodeCache] Подключение к Redis")
        return cls(aioredis.Redis.from_url(url, decode_responses=True))

    def key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    async def get(self, name: str) -> Optional[GeocodeResult]:
        try:
            raw = await self.client.get(self.key(name))
        except RedisError as e:
            raise CacheUnavailableError("Чтение из Redis не удалось", component="RedisGeocodeCache", original_error=e)

        if raw is None:
            return None

        try:
            return GeocodeResult.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"[RedisGeocodeCache] Битая запись {self.key(name)}: {e}")
            return None

    async def set(self, name: str, result: GeocodeResult):
        try:
            await self.client.set(self.key(name), result.model_dump_json(), ex=self.ttl)
        except RedisError as e:
            raise CacheUnavailableError("Запись в Redis не удалась", component="RedisGeocodeCache", original_error=e)

    async def close(self):
        await self.client.aclose()
