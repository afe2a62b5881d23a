"""
Определение аэропорта штампа в пределах уже найденной страны.
"""

from typing import List, Optional, Sequence, Union

from loguru import logger

from config.settings import (
    UNKNOWN_AIRPORT,
    AIRPORT_TOKEN_CONFIDENCE,
    AIRPORT_KEYWORD_CONFIDENCE,
    AIRPORT_BLOCK_CONFIDENCE,
    AIRPORT_MAIN_CONFIDENCE,
    AIRPORT_UNKNOWN_CONFIDENCE,
)
from contracts.stamp_dto import TextBlock
from src.parsing.detectors.detection_result import DetectionResult
from src.parsing.knowledge import AirportRecord, KnowledgeBase, load_knowledge_base
from src.parsing.text_normalizer import normalize


def _display_name(airport: AirportRecord) -> str:
    """Каноническое название в верхнем регистре, с суффиксом AIRPORT."""
    name = airport.name.upper()
    return name if "AIRPORT" in name else f"{name} AIRPORT"


def _normalized_blocks(blocks: Sequence[Union[TextBlock, str]]) -> List[str]:
    result = []
    for block in blocks:
        if isinstance(block, TextBlock):
            result.append(block.text)
        else:
            result.append(normalize(block))
    return result


def detect_airport(
    blocks: Sequence[Union[TextBlock, str]],
    country: str,
    knowledge: Optional[KnowledgeBase] = None
) -> DetectionResult[str]:
    """
    Определяет аэропорт по строкам страницы.

    Args:
        blocks: Строки страницы (TextBlock или сырые строки)
        country: Каноническое название страны (результат detect_country)

    Returns:
        DetectionResult с названием аэропорта; всегда какая-то догадка.
    """
    knowledge = knowledge or load_knowledge_base()

    record = knowledge.find_by_name(country)
    if record is None:
        logger.debug(f"[AirportResolver] Страна '{country}' вне справочника")
        return DetectionResult(UNKNOWN_AIRPORT, AIRPORT_UNKNOWN_CONFIDENCE)

    normalized = _normalized_blocks(blocks)
    combined = " ".join(normalized)

    # 1. Токены аэропортов страны (порядок объявления)
    for airport in record.airports:
        token = next((t for t in airport.tokens if t in combined), None)
        if token:
            logger.debug(f"[AirportResolver] Токен '{token}' -> {airport.name}")
            return DetectionResult(_display_name(airport), AIRPORT_TOKEN_CONFIDENCE)

    # 2. Ключевое слово аэропорта в любой строке
    for block in normalized:
        if any(keyword in block for keyword in knowledge.airport_keywords):
            if record.main_airport:
                logger.debug(f"[AirportResolver] Ключевое слово в '{block}', главный аэропорт")
                return DetectionResult(record.main_airport.name, AIRPORT_KEYWORD_CONFIDENCE)
            logger.debug(f"[AirportResolver] Ключевое слово в '{block}', аэропортов у страны нет")
            return DetectionResult(block, AIRPORT_BLOCK_CONFIDENCE)

    # 3. Главный аэропорт страны
    if record.main_airport:
        return DetectionResult(record.main_airport.name, AIRPORT_MAIN_CONFIDENCE)

    return DetectionResult(UNKNOWN_AIRPORT, AIRPORT_UNKNOWN_CONFIDENCE)
