"""
Аналитика истории штампов пользователя.

- attach_coordinates: записи + координаты аэропорта для карты
- build_word_cloud: веса слов из названий аэропортов
- unique_stamp_images: уникальные ссылки на картинки штампов

Записи приходят из хранилища (владелец - внешний слой), здесь только чтение.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from config.settings import WORD_CLOUD_LIMIT
from contracts.stamp_dto import PassportEntry
from src.geocoding import GeocodeResult, GeocodingService

# Точка (0, 0) на карте = координаты не найдены
MISSING_COORDINATES = GeocodeResult(lat=0.0, lng=0.0)

EXCLUDED_WORDS = frozenset({"AIRPORT", "INTERNATIONAL", "CAPITAL", "THE", "AND", "FOR", "WITH"})
WORD_WEIGHT = 2
MUMBAI_BONUS = 3


@dataclass(frozen=True)
class WordWeight:
    """Слово облака и его вес."""
    text: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "value": self.value}


async def attach_coordinates(
    entries: List[PassportEntry],
    service: GeocodingService
) -> List[Dict[str, Any]]:
    """
    Записи в формате хранилища с полем coordinates.

    Порядок записей сохраняется; ненайденные аэропорты получают (0, 0).
    """
    coordinates = await service.batch_geocode([entry.airport for entry in entries])

    result = []
    for entry, point in zip(entries, coordinates):
        record = entry.to_record()
        record["coordinates"] = (point or MISSING_COORDINATES).to_dict()
        result.append(record)

    missing = sum(1 for point in coordinates if point is None)
    if missing:
        logger.info(f"[History] Без координат: {missing} из {len(entries)}")
    return result


def build_word_cloud(airport_names: Iterable[str], limit: Optional[int] = WORD_CLOUD_LIMIT) -> List[WordWeight]:
    """
    Облако слов по названиям аэропортов.

    Каждое слово (кроме служебных) даёт +2, название с MUMBAI даёт MUMBAI ещё +3.
    Сортировка по убыванию веса, при равенстве - порядок первого появления.
    """
    weights: Dict[str, int] = {}

    for name in airport_names:
        location = (name or "").upper()

        if "MUMBAI" in location:
            weights["MUMBAI"] = weights.get("MUMBAI", 0) + MUMBAI_BONUS

        for word in location.split(" "):
            word = word.strip()
            if not word or word in EXCLUDED_WORDS:
                continue
            weights[word] = weights.get(word, 0) + WORD_WEIGHT

    words = sorted(
        (WordWeight(text=text, value=value) for text, value in weights.items()),
        key=lambda w: w.value,
        reverse=True
    )
    return words[:limit] if limit is not None else words


def unique_stamp_images(entries: Iterable[PassportEntry]) -> List[str]:
    """Уникальные непустые ссылки на картинки штампов (порядок первого появления)."""
    seen: Dict[str, None] = {}
    for entry in entries:
        if entry.stamp_image:
            seen.setdefault(entry.stamp_image, None)
    return list(seen)
