"""
Справочник стран, кодов, городов и аэропортов.

ЦКП: неизменяемая модель KnowledgeBase, загруженная один раз из countries.yaml.

Архитектурный принцип:
- Порядок объявления в YAML = порядок поиска (tie-break детекторов)
- Все коллекции - кортежи, записи - frozen dataclass
- Справочник только для чтения, поэтому кешируется на уровне модуля
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from loguru import logger

from src.parsing.domain.exceptions import KnowledgeBaseError

DEFAULT_KNOWLEDGE_FILE = Path(__file__).parent / "countries.yaml"


@dataclass(frozen=True)
class AirportRecord:
    """Аэропорт: отображаемое название и токены для поиска в тексте."""
    name: str
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class CountryRecord:
    """
    Страна из справочника.

    key - ISO код (ключ записи)
    codes - все идентифицирующие коды (ISO-2, ISO-3, название, варианты)
    airports - аэропорты; первый считается главным
    """
    key: str
    name: str
    codes: Tuple[str, ...]
    airports: Tuple[AirportRecord, ...] = ()

    @property
    def main_airport(self) -> Optional[AirportRecord]:
        return self.airports[0] if self.airports else None


@dataclass(frozen=True)
class CityAlias:
    """Город или алиас, однозначно указывающий на страну."""
    alias: str
    country: str


@dataclass(frozen=True)
class KnowledgeBase:
    """Справочник целиком. Поиск всегда в порядке объявления."""
    countries: Tuple[CountryRecord, ...]
    city_aliases: Tuple[CityAlias, ...]
    airport_keywords: Tuple[str, ...]

    def find_by_code(self, code: str) -> Optional[CountryRecord]:
        """Первая страна, у которой code входит в набор кодов."""
        for country in self.countries:
            if code in country.codes:
                return country
        return None

    def find_by_name(self, name: str) -> Optional[CountryRecord]:
        """Страна по каноническому названию (точное совпадение)."""
        for country in self.countries:
            if country.name == name:
                return country
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnowledgeBase":
        """
        Собирает справочник из распарсенного YAML.

        Raises:
            KnowledgeBaseError: если структура файла некорректна
        """
        if not isinstance(data, dict) or "countries" not in data:
            raise KnowledgeBaseError(
                "Справочник должен содержать секцию 'countries'",
                component="KnowledgeBase",
            )

        try:
            countries = tuple(
                CountryRecord(
                    key=str(item["key"]),
                    name=str(item["name"]),
                    codes=tuple(str(code) for code in item.get("codes", [])),
                    airports=tuple(
                        AirportRecord(
                            name=str(airport["name"]),
                            tokens=tuple(str(token) for token in airport.get("tokens", [])),
                        )
                        for airport in item.get("airports") or []
                    ),
                )
                for item in data["countries"]
            )
            city_aliases = tuple(
                CityAlias(alias=str(alias), country=str(country))
                for alias, country in data.get("city_aliases") or []
            )
        except (KeyError, TypeError, ValueError) as e:
            raise KnowledgeBaseError(
                "Некорректная запись в справочнике",
                component="KnowledgeBase",
                original_error=e,
            )

        known = {country.name for country in countries}
        for city in city_aliases:
            if city.country not in known:
                raise KnowledgeBaseError(
                    f"Алиас '{city.alias}' ссылается на неизвестную страну '{city.country}'",
                    component="KnowledgeBase",
                )

        keywords = tuple(str(word) for word in data.get("airport_keywords") or [])
        return cls(countries=countries, city_aliases=city_aliases, airport_keywords=keywords)


def load_knowledge_base_file(path: Path) -> KnowledgeBase:
    """Читает и валидирует YAML справочника."""
    if not path.exists():
        raise KnowledgeBaseError(f"Файл справочника не найден: {path}", component="KnowledgeBase")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise KnowledgeBaseError(
            f"Ошибка разбора YAML: {path.name}",
            component="KnowledgeBase",
            original_error=e,
        )

    knowledge = KnowledgeBase.from_dict(data)
    logger.debug(
        f"[KnowledgeBase] Загружен {path.name}: стран {len(knowledge.countries)}, "
        f"алиасов {len(knowledge.city_aliases)}"
    )
    return knowledge


@lru_cache(maxsize=1)
def load_knowledge_base() -> KnowledgeBase:
    """Справочник по умолчанию (загружается один раз за процесс)."""
    return load_knowledge_base_file(DEFAULT_KNOWLEDGE_FILE)
