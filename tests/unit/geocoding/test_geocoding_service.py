import asyncio
from typing import Dict, List, Optional

import pytest

from src.geocoding import (
    CacheUnavailableError,
    GeocodeCache,
    GeocodeResult,
    GeocodingService,
    IDurableGeocodeCache,
    RateLimitedError,
    UnresolvedLookupError,
)

ZURICH = GeocodeResult(lat=47.4581, lng=8.5555)


class StubLocationIQClient:
    """
    Заглушка LocationIQClient.

    responses: имя -> список ответов по попыткам (GeocodeResult, None или исключение).
    Последний ответ повторяется, если попыток больше.
    """

    def __init__(self, responses: Dict[str, list] = None, events: list = None):
        self.responses = responses or {}
        self.calls: List[str] = []
        self.events = events if events is not None else []
        self.closed = False

    async def search(self, query: str) -> Optional[GeocodeResult]:
        attempt = self.calls.count(query)
        self.calls.append(query)
        self.events.append(("call", query))
        await asyncio.sleep(0)

        script = self.responses.get(query, [GeocodeResult(lat=1.0, lng=2.0)])
        response = script[min(attempt, len(script) - 1)]
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self):
        self.closed = True


class FakeDurableCache(IDurableGeocodeCache):
    """Долговременный кэш в памяти (вместо Redis)."""

    def __init__(self, entries: Dict[str, GeocodeResult] = None, broken: bool = False):
        self.entries = dict(entries or {})
        self.broken = broken
        self.closed = False

    async def get(self, name: str) -> Optional[GeocodeResult]:
        if self.broken:
            raise CacheUnavailableError("down", component="FakeDurableCache")
        return self.entries.get(name)

    async def set(self, name: str, result: GeocodeResult):
        if self.broken:
            raise CacheUnavailableError("down", component="FakeDurableCache")
        self.entries[name] = result

    async def close(self):
        self.closed = True


class SlowDurableCache(FakeDurableCache):
    """Первое чтение видит Redis до записи и отвечает только после release."""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()
        self.reads = 0

    async def get(self, name: str) -> Optional[GeocodeResult]:
        self.reads += 1
        snapshot = self.entries.get(name)
        if self.reads == 1:
            await self.release.wait()
        return snapshot


@pytest.fixture
def events():
    """Fixture: общий журнал вызовов API и пауз."""
    return []


@pytest.fixture
def sleeps(monkeypatch, events):
    """Fixture: asyncio.sleep записывает паузы и не ждёт."""
    delays = []
    real_sleep = asyncio.sleep

    async def fake_sleep(delay, *args, **kwargs):
        if delay:
            delays.append(delay)
            events.append(("sleep", delay))
        await real_sleep(0)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return delays


@pytest.mark.asyncio
async def test_concurrent_resolve_is_deduplicated(sleeps):
    """Тест: два параллельных resolve одного имени -> один запрос к API."""
    client = StubLocationIQClient({"Zurich Airport": [ZURICH]})
    service = GeocodingService(client)

    first, second = await asyncio.gather(
        service.resolve("Zurich Airport"),
        service.resolve("Zurich Airport"),
    )

    assert client.calls == ["Zurich Airport"]
    assert first == second == ZURICH


@pytest.mark.asyncio
async def test_slow_redis_read_does_not_repeat_finished_request():
    """Тест: запрос завершился, пока шло чтение Redis -> второго запроса к API нет."""
    client = StubLocationIQClient({"Zurich Airport": [ZURICH]})
    durable = SlowDurableCache()
    service = GeocodingService(client, durable_cache=durable)

    slow = asyncio.create_task(service.resolve("Zurich Airport"))
    await asyncio.sleep(0)

    first = await service.resolve("Zurich Airport")
    durable.release.set()
    second = await slow

    assert client.calls == ["Zurich Airport"]
    assert first == second == ZURICH


@pytest.mark.asyncio
async def test_rate_limit_backoff_then_success(sleeps):
    """Тест: 429, 429, успех -> паузы 1 с и 2 с, результат в обоих кэшах."""
    client = StubLocationIQClient({
        "Zurich Airport": [RateLimitedError("429"), RateLimitedError("429"), ZURICH],
    })
    cache = GeocodeCache()
    durable = FakeDurableCache()
    service = GeocodingService(client, cache=cache, durable_cache=durable)

    result = await service.resolve("Zurich Airport")

    assert result == ZURICH
    assert sleeps == [1.0, 2.0]
    assert len(client.calls) == 3
    assert cache.get("Zurich Airport") == ZURICH
    assert durable.entries["Zurich Airport"] == ZURICH


@pytest.mark.asyncio
async def test_rate_limit_exhausted(sleeps):
    """Тест: 429 на всех 3 попытках -> None, ничего не кэшируется."""
    client = StubLocationIQClient({"Busy": [RateLimitedError("429")]})
    cache = GeocodeCache()
    service = GeocodingService(client, cache=cache)

    assert await service.resolve("Busy") is None
    assert len(client.calls) == 3
    assert sleeps == [1.0, 2.0]
    assert "Busy" not in cache


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [None, UnresolvedLookupError("HTTP 500")])
async def test_failures_resolve_to_none(sleeps, response):
    """Тест: ничего не найдено или ошибка -> None без повторов."""
    client = StubLocationIQClient({"Nowhere": [response]})
    cache = GeocodeCache()
    service = GeocodingService(client, cache=cache)

    assert await service.resolve("Nowhere") is None
    assert client.calls == ["Nowhere"]
    assert sleeps == []
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_fast_cache_hit_skips_api(sleeps):
    """Тест: попадание в кэш памяти - API не вызывается."""
    client = StubLocationIQClient()
    cache = GeocodeCache()
    cache.set("Zurich Airport", ZURICH)

    assert await GeocodingService(client, cache=cache).resolve("Zurich Airport") == ZURICH
    assert client.calls == []


@pytest.mark.asyncio
async def test_durable_hit_is_promoted(sleeps):
    """Тест: попадание в Redis копируется в кэш памяти."""
    client = StubLocationIQClient()
    cache = GeocodeCache()
    durable = FakeDurableCache({"Zurich Airport": ZURICH})
    service = GeocodingService(client, cache=cache, durable_cache=durable)

    assert await service.resolve("Zurich Airport") == ZURICH
    assert client.calls == []
    assert cache.get("Zurich Airport") == ZURICH


@pytest.mark.asyncio
async def test_broken_durable_cache_is_a_miss(sleeps):
    """Тест: Redis недоступен -> запрос к API, результат в памяти."""
    client = StubLocationIQClient({"Zurich Airport": [ZURICH]})
    cache = GeocodeCache()
    service = GeocodingService(client, cache=cache, durable_cache=FakeDurableCache(broken=True))

    assert await service.resolve("Zurich Airport") == ZURICH
    assert cache.get("Zurich Airport") == ZURICH


@pytest.mark.asyncio
async def test_batches_of_five_with_delay(sleeps, events):
    """Тест: 7 имён -> батч из 5, пауза 1 с, батч из 2; порядок результатов сохранён."""
    names = [f"Airport {n}" for n in range(7)]
    client = StubLocationIQClient(
        {name: [GeocodeResult(lat=float(n), lng=0.0)] for n, name in enumerate(names)},
        events=events,
    )
    service = GeocodingService(client)

    results = await service.batch_geocode(names)

    assert [r.lat for r in results] == [float(n) for n in range(7)]
    assert events == (
        [("call", name) for name in names[:5]]
        + [("sleep", 1.0)]
        + [("call", name) for name in names[5:]]
    )


@pytest.mark.asyncio
async def test_batch_with_duplicates_and_failures(sleeps):
    """Тест: повторы имени - один запрос; неудачи выровнены как None."""
    client = StubLocationIQClient({"Zurich Airport": [ZURICH], "Nowhere": [None]})
    service = GeocodingService(client)

    results = await service.batch_geocode(["Zurich Airport", "Nowhere", "Zurich Airport"])

    assert results == [ZURICH, None, ZURICH]
    assert sorted(client.calls) == ["Nowhere", "Zurich Airport"]


@pytest.mark.asyncio
async def test_batch_empty():
    """Тест: пустой список -> пустой список."""
    assert await GeocodingService(StubLocationIQClient()).batch_geocode([]) == []


@pytest.mark.asyncio
async def test_second_round_after_drain(sleeps):
    """Тест: после разбора очереди новые запросы снова обрабатываются."""
    client = StubLocationIQClient()
    service = GeocodingService(client)

    await service.resolve("A")
    await service.resolve("B")

    assert client.calls == ["A", "B"]


@pytest.mark.asyncio
async def test_close_releases_resources():
    """Тест: close закрывает HTTP клиент и Redis."""
    client = StubLocationIQClient()
    durable = FakeDurableCache()
    await GeocodingService(client, durable_cache=durable).close()

    assert client.closed
    assert durable.closed
