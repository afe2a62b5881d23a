"""
Домен Geocoding: название аэропорта -> координаты (LocationIQ).

Кэш в памяти + Redis, дедупликация запросов в полёте, батчи с паузой,
повторы при HTTP 429.
"""

from .models import GeocodeResult
from .cache import GeocodeCache, IDurableGeocodeCache, RedisGeocodeCache
from .locationiq_client import LocationIQClient
from .geocoding_service import GeocodingService
from .factory import build_geocoding_service
from .exceptions import GeocodingError, RateLimitedError, UnresolvedLookupError, CacheUnavailableError

__all__ = [
    "GeocodeResult",
    "GeocodeCache",
    "IDurableGeocodeCache",
    "RedisGeocodeCache",
    "LocationIQClient",
    "GeocodingService",
    "build_geocoding_service",
    "GeocodingError",
    "RateLimitedError",
    "UnresolvedLookupError",
    "CacheUnavailableError",
]
