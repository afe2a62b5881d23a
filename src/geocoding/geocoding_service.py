"""
Сервис геокодинга аэропортов для карты истории.

ЦКП: координаты (или None) для каждого названия аэропорта.

Архитектурный принцип:
- Кэш в памяти -> Redis -> LocationIQ (попадание в Redis копируется в память)
- Одно название в полёте только один раз: остальные вызовы ждут тот же результат
- Очередь разбирается батчами по 5 с паузой 1 с между батчами
- HTTP 429 -> до 3 попыток с паузой 1 с, 2 с, ...
- Ошибки не пробрасываются: неудача = None

Все структуры меняются только из одного event loop.
"""

import asyncio
from collections import deque
from typing import Deque, Dict, List, Optional

from loguru import logger

from config.settings import (
    GEOCODE_BATCH_SIZE,
    GEOCODE_BATCH_DELAY,
    GEOCODE_MAX_ATTEMPTS,
    GEOCODE_INITIAL_BACKOFF,
)
from src.geocoding.cache import GeocodeCache, IDurableGeocodeCache
from src.geocoding.exceptions import CacheUnavailableError, GeocodingError, RateLimitedError
from src.geocoding.locationiq_client import LocationIQClient
from src.geocoding.models import GeocodeResult


class GeocodingService:
    """
    Резолвер названий аэропортов в координаты.

    Создаётся явно и передаётся по ссылке (один экземпляр на процесс).
    """

    def __init__(
        self,
        client: LocationIQClient,
        cache: Optional[GeocodeCache] = None,
        durable_cache: Optional[IDurableGeocodeCache] = None,
        batch_size: int = GEOCODE_BATCH_SIZE,
        batch_delay: float = GEOCODE_BATCH_DELAY,
        max_attempts: int = GEOCODE_MAX_ATTEMPTS,
        initial_backoff: float = GEOCODE_INITIAL_BACKOFF
    ):
        self.client = client
        self.cache = cache if cache is not None else GeocodeCache()
        self.durable_cache = durable_cache
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.max_attempts = max_attempts
        self.initial_backoff = initial_backoff

        self._pending: Dict[str, List[asyncio.Future]] = {}
        self._queue: Deque[str] = deque()
        self._drain_lock = asyncio.Lock()
        self._drain_task: Optional[asyncio.Task] = None

    # =========================================================================
    # Публичный API
    # =========================================================================

    async def resolve(self, name: str) -> Optional[GeocodeResult]:
        """
        Координаты одного названия.

        Параллельные вызовы с одним названием дают один запрос к API.
        """
        cached = await self._lookup_cache(name)
        if cached is not None:
            return cached

        future = asyncio.get_running_loop().create_future()
        waiters = self._pending.get(name)
        if waiters is not None:
            logger.debug(f"[GeocodingService] '{name}' уже в полёте, ждём результат")
            waiters.append(future)
        else:
            self._pending[name] = [future]
            self._queue.append(name)
            self._ensure_drain()

        return await future

    async def batch_geocode(self, names: List[str]) -> List[Optional[GeocodeResult]]:
        """Координаты для списка названий; порядок совпадает с входом."""
        if not names:
            return []
        logger.info(f"[GeocodingService] Геокодинг {len(names)} названий")
        return list(await asyncio.gather(*(self.resolve(name) for name in names)))

    async def geocode_with_retry(self, name: str) -> Optional[GeocodeResult]:
        """
        Запрос к LocationIQ с повторами при 429.

        Успешный результат записывается в оба уровня кэша.
        """
        delay = self.initial_backoff
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = await self.client.search(name)
            except RateLimitedError:
                if attempt >= self.max_attempts:
                    logger.error(f"[GeocodingService] '{name}': лимит запросов, попытки исчерпаны")
                    return None
                logger.warning(
                    f"[GeocodingService] '{name}': 429, повтор через {delay:.1f}s "
                    f"(попытка {attempt}/{self.max_attempts})"
                )
                await asyncio.sleep(delay)
                delay *= 2
                continue
            except GeocodingError as e:
                logger.error(f"[GeocodingService] '{name}': {e}")
                return None

            if result is None:
                logger.info(f"[GeocodingService] '{name}': координаты не найдены")
                return None

            await self._store(name, result)
            return result

        return None

    async def close(self):
        """Освобождает HTTP клиент и соединение Redis."""
        await self.client.close()
        if self.durable_cache is not None:
            await self.durable_cache.close()

    # =========================================================================
    # Кэш
    # =========================================================================

    async def _lookup_cache(self, name: str) -> Optional[GeocodeResult]:
        cached = self.cache.get(name)
        if cached is not None:
            return cached

        if self.durable_cache is None:
            return None

        try:
            cached = await self.durable_cache.get(name)
        except CacheUnavailableError as e:
            logger.warning(f"[GeocodingService] Redis недоступен, промах: {e}")
            cached = None

        if cached is not None:
            self.cache.set(name, cached)
            return cached

        # Пока ждали Redis, запрос в полёте мог завершиться и заполнить память
        return self.cache.get(name)

    async def _store(self, name: str, result: GeocodeResult):
        self.cache.set(name, result)
        if self.durable_cache is None:
            return
        try:
            await self.durable_cache.set(name, result)
        except CacheUnavailableError as e:
            logger.warning(f"[GeocodingService] Redis недоступен, запись пропущена: {e}")

    # =========================================================================
    # Очередь
    # =========================================================================

    def _ensure_drain(self):
        if self._drain_task is None or self._drain_task.done():
            self._drain_task = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self):
        async with self._drain_lock:
            while self._queue:
                count = min(self.batch_size, len(self._queue))
                batch = [self._queue.popleft() for _ in range(count)]
                logger.debug(f"[GeocodingService] Батч: {batch}")

                results = await asyncio.gather(
                    *(self.geocode_with_retry(name) for name in batch),
                    return_exceptions=True
                )

                for name, result in zip(batch, results):
                    if isinstance(result, BaseException):
                        logger.error(f"[GeocodingService] '{name}': неожиданная ошибка: {result!r}")
                        result = None
                    self._release(name, result)

                if self._queue:
                    await asyncio.sleep(self.batch_delay)

        self._drain_task = None
        if self._queue:
            self._ensure_drain()

    def _release(self, name: str, result: Optional[GeocodeResult]):
        for waiter in self._pending.pop(name, []):
            if not waiter.done():
                waiter.set_result(result)
