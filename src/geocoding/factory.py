"""
Фабрика сервиса геокодинга.
"""

from typing import Optional

from loguru import logger

from config.settings import LOCATIONIQ_API_KEY, REDIS_URL
from src.geocoding.cache import GeocodeCache, RedisGeocodeCache
from src.geocoding.geocoding_service import GeocodingService
from src.geocoding.locationiq_client import LocationIQClient


def build_geocoding_service(
    api_key: Optional[str] = None,
    redis_url: Optional[str] = None
) -> GeocodingService:
    """
    Собирает GeocodingService из настроек.

    Redis подключается только если задан REDIS_URL; без него работает
    только кэш в памяти.
    """
    api_key = api_key if api_key is not None else LOCATIONIQ_API_KEY
    redis_url = redis_url if redis_url is not None else REDIS_URL

    if not api_key:
        logger.warning("[Geocoding] LOCATIONIQ_API_KEY не задан, запросы к API будут отклонены")

    durable_cache = RedisGeocodeCache.from_url(redis_url) if redis_url else None
    logger.info(f"[Geocoding] Сервис создан (Redis: {'да' if durable_cache else 'нет'})")

    return GeocodingService(
        client=LocationIQClient(api_key=api_key),
        cache=GeocodeCache(),
        durable_cache=durable_cache,
    )
