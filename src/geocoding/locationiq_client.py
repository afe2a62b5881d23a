"""
HTTP клиент LocationIQ (forward geocoding).

GET <LOCATIONIQ_URL>?key=<api key>&q=<name>&format=json
Ответ - массив мест, координаты строками: [{"lat": "47.45", "lon": "8.56", ...}]
"""

from typing import Optional

import httpx
from loguru import logger

from config.settings import LOCATIONIQ_API_KEY, LOCATIONIQ_URL, GEOCODE_HTTP_TIMEOUT
from src.geocoding.exceptions import RateLimitedError, UnresolvedLookupError
from src.geocoding.models import GeocodeResult


class LocationIQClient:
    """
    Один запрос к LocationIQ без повторов.

    Повторы при 429 и кэширование - забота GeocodingService.
    """

    def __init__(
        self,
        api_key: str = LOCATIONIQ_API_KEY,
        base_url: str = LOCATIONIQ_URL,
        timeout: float = GEOCODE_HTTP_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.api_key = api_key
        self.base_url = base_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def search(self, query: str) -> Optional[GeocodeResult]:
        """
        Ищет координаты по строке.

        Returns:
            Первый результат или None если ничего не найдено

        Raises:
            RateLimitedError: HTTP 429
            UnresolvedLookupError: сеть, другой статус, некорректный ответ
        """
        params = {"key": self.api_key, "q": query, "format": "json"}
        try:
            response = await self._client.get(self.base_url, params=params)
        except httpx.RequestError as e:
            raise UnresolvedLookupError(f"Запрос '{query}' не выполнен", component="LocationIQClient", original_error=e)

        if response.status_code == 429:
            raise RateLimitedError(f"Лимит запросов при поиске '{query}'", component="LocationIQClient")

        # LocationIQ отвечает 404 "Unable to geocode", когда мест нет
        if response.status_code == 404:
            logger.debug(f"[LocationIQClient] Ничего не найдено: '{query}'")
            return None

        if response.status_code != 200:
            raise UnresolvedLookupError(
                f"HTTP {response.status_code} для '{query}'",
                component="LocationIQClient"
            )

        try:
            places = response.json()
            if not places:
                return None
            first = places[0]
            return GeocodeResult(lat=float(first["lat"]), lng=float(first["lon"]))
        except (ValueError, KeyError, TypeError, IndexError) as e:
            raise UnresolvedLookupError(
                f"Некорректный ответ для '{query}'",
                component="LocationIQClient",
                original_error=e
            )

    async def close(self):
        if self._owns_client:
            await self._client.aclose()
