"""
Исключения для домена Geocoding.

Наружу (resolve, batch_geocode) не пробрасываются: неудачный поиск = None.
"""

from typing import Optional


class GeocodingError(Exception):
    """Базовое исключение для ошибок домена Geocoding."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Geocoding Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class RateLimitedError(GeocodingError):
    """HTTP 429 от LocationIQ: повторить запрос после паузы."""
    pass


class UnresolvedLookupError(GeocodingError):
    """Неповторяемая ошибка запроса (сеть, статус, формат ответа)."""
    pass


class CacheUnavailableError(GeocodingError):
    """Долговременный кэш (Redis) недоступен; считается промахом."""
    pass
