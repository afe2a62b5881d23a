import pytest

from contracts.stamp_dto import PassportEntry
from src.geocoding import GeocodeResult
from src.history import MISSING_COORDINATES, attach_coordinates, build_word_cloud, unique_stamp_images


class StubGeocodingService:
    """Заглушка GeocodingService: координаты по словарю."""

    def __init__(self, known):
        self.known = known
        self.requested = []

    async def batch_geocode(self, names):
        self.requested.append(list(names))
        return [self.known.get(name) for name in names]


def entry(sl_no, airport, stamp_image=""):
    return PassportEntry(sl_no=sl_no, country="Switzerland", airport=airport, stamp_image=stamp_image)


def test_word_cloud_mumbai_bonus():
    """Тест: MUMBAI получает +3 за название и +2 за слово."""
    words = build_word_cloud(["Mumbai Airport", "MUMBAI AIRPORT", "Split Airport"])

    assert [w.to_dict() for w in words] == [
        {"text": "MUMBAI", "value": 10},
        {"text": "SPLIT", "value": 2},
    ]


def test_word_cloud_excluded_words():
    """Тест: служебные слова не попадают в облако."""
    words = build_word_cloud(["THE CAPITAL INTERNATIONAL AIRPORT AND FOR WITH"])
    assert words == []


def test_word_cloud_tie_keeps_first_seen_order():
    """Тест: при равном весе порядок первого появления."""
    words = build_word_cloud(["ZURICH AIRPORT", "SPLIT AIRPORT", "ZAGREB AIRPORT", "SPLIT"])

    assert [(w.text, w.value) for w in words] == [("SPLIT", 4), ("ZURICH", 2), ("ZAGREB", 2)]


def test_word_cloud_limit():
    """Тест: не больше 50 слов по умолчанию."""
    names = [f"CITY{n} AIRPORT" for n in range(60)]

    assert len(build_word_cloud(names)) == 50
    assert len(build_word_cloud(names, limit=None)) == 60
    assert len(build_word_cloud(names, limit=3)) == 3


def test_word_cloud_empty_names():
    """Тест: пустые названия пропускаются."""
    assert build_word_cloud(["", None, "   "]) == []


def test_unique_stamp_images():
    """Тест: уникальные непустые ссылки в порядке первого появления."""
    entries = [
        entry(1, "ZURICH AIRPORT", "/uploads/stamps/b.jpg"),
        entry(2, "ZURICH AIRPORT", ""),
        entry(3, "SPLIT AIRPORT", "/uploads/stamps/a.jpg"),
        entry(4, "SPLIT AIRPORT", "/uploads/stamps/b.jpg"),
    ]

    assert unique_stamp_images(entries) == ["/uploads/stamps/b.jpg", "/uploads/stamps/a.jpg"]


@pytest.mark.asyncio
async def test_attach_coordinates():
    """Тест: координаты добавляются к записям, ненайденные -> (0, 0)."""
    zurich = GeocodeResult(lat=47.4581, lng=8.5555)
    service = StubGeocodingService({"ZURICH AIRPORT": zurich})
    entries = [entry(1, "ZURICH AIRPORT"), entry(2, "ATLANTIS AIRPORT")]

    records = await attach_coordinates(entries, service)

    assert service.requested == [["ZURICH AIRPORT", "ATLANTIS AIRPORT"]]
    assert records[0]["Airport_Name_with_location"] == "ZURICH AIRPORT"
    assert records[0]["coordinates"] == {"lat": 47.4581, "lng": 8.5555}
    assert records[1]["coordinates"] == MISSING_COORDINATES.to_dict() == {"lat": 0.0, "lng": 0.0}


@pytest.mark.asyncio
async def test_attach_coordinates_empty():
    """Тест: нет записей -> пустой список."""
    assert await attach_coordinates([], StubGeocodingService({})) == []
