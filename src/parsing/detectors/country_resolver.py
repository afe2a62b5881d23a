"""
Определение страны штампа по тексту всей страницы.

Приоритет (строгий, первое совпадение выигрывает):
1. Отдельный двухбуквенный код (HR, AT, ...) - только первое вхождение
2. Город/алиас в порядке справочника
3. Полное название страны
4. Страна по умолчанию
"""

import re
from typing import Optional

from loguru import logger

from config.settings import (
    DEFAULT_COUNTRY,
    COUNTRY_CODE_CONFIDENCE,
    COUNTRY_CITY_CONFIDENCE,
    COUNTRY_NAME_CONFIDENCE,
    COUNTRY_DEFAULT_CONFIDENCE,
)
from src.parsing.detectors.detection_result import DetectionResult
from src.parsing.knowledge import KnowledgeBase, load_knowledge_base
from src.parsing.text_normalizer import normalize

# Код страны: два латинских символа, окружённые пробелом/двоеточием/границей строки
COUNTRY_CODE_RE = re.compile(r"(?:^|\s|:)([A-Z]{2})(?:\s|:|$)")


def detect_country(
    text: str,
    knowledge: Optional[KnowledgeBase] = None
) -> DetectionResult[str]:
    """
    Определяет страну по тексту страницы.

    Всегда возвращает догадку (никогда не None).

    Пример:
        detect_country("HR 12.05.23") -> DetectionResult("Croatia", 0.95)
    """
    knowledge = knowledge or load_knowledge_base()
    normalized = normalize(text)

    # 1. Код страны (смотрим только на первое совпадение)
    match = COUNTRY_CODE_RE.search(normalized)
    if match:
        code = match.group(1)
        country = knowledge.find_by_code(code)
        if country:
            logger.debug(f"[CountryResolver] Код страны: {code} -> {country.name}")
            return DetectionResult(country.name, COUNTRY_CODE_CONFIDENCE)
        logger.debug(f"[CountryResolver] Код '{code}' не найден в справочнике")

    # 2. Город / алиас
    for city in knowledge.city_aliases:
        if city.alias in normalized:
            logger.debug(f"[CountryResolver] Город: {city.alias} -> {city.country}")
            return DetectionResult(city.country, COUNTRY_CITY_CONFIDENCE)

    # 3. Полное название страны
    for country in knowledge.countries:
        if country.name.upper() in normalized:
            logger.debug(f"[CountryResolver] Название страны: {country.name}")
            return DetectionResult(country.name, COUNTRY_NAME_CONFIDENCE)

    logger.debug(f"[CountryResolver] Страна не найдена, по умолчанию: {DEFAULT_COUNTRY}")
    return DetectionResult(DEFAULT_COUNTRY, COUNTRY_DEFAULT_CONFIDENCE)
