"""
Классификация штампа: прилёт (ARRIVAL) или вылет (DEPARTURE).

Порядок:
1. Стрелки в тексте окна (← ⇐ <- <= -> прилёт; → ⇒ -> => -> вылет)
2. Стрелочные паттерны по нормализованным строкам страницы (вылет раньше)
3. Ключевые слова (сначала вылет, потом прилёт)
4. По умолчанию ARRIVAL

Стрелки шага 1 ищутся в тексте без нормализации (normalize выбрасывает
символы стрелок). Шаг 2 и ключевые слова работают с нормализованным
текстом, поэтому одиночные < и > (строка MRZ, "STAY > 90 DAYS") не
решают направление за ключевые слова.
"""

import re
from typing import Sequence, Union

from loguru import logger

from contracts.stamp_dto import Direction, TextBlock
from src.parsing.text_normalizer import normalize

LEFT_ARROWS = ("←", "⇐", "<-", "<=")
RIGHT_ARROWS = ("→", "⇒", "->", "=>")

DEPARTURE_PATTERNS = [
    re.compile(r"<[-=]*"),
    re.compile(r"[-=]*>"),
    re.compile(r"\[?→\]?"),
    re.compile(r"\[?⇒\]?"),
]
ARRIVAL_PATTERNS = [
    re.compile(r"[-=]*>"),
    re.compile(r"<[-=]*"),
    re.compile(r"\[?←\]?"),
    re.compile(r"\[?⇐\]?"),
]

DEPARTURE_KEYWORDS = [
    "DEPARTURE", "IMMIGRATION OUT", "EXIT", "LEFT", "SALIDA",
    "OUT", "SORTIE", "AUSREISE", "DEPARTED",
]
ARRIVAL_KEYWORDS = [
    "ARRIVAL", "IMMIGRATION IN", "ENTRY", "ADMITTED", "ENTRADA",
    "IN", "ENTRÉE", "EINREISE",
]

_SPACES_RE = re.compile(r"\s+")


def _glyph_form(text: str) -> str:
    """Верхний регистр и схлопнутые пробелы, символы стрелок сохраняются."""
    return _SPACES_RE.sub(" ", (text or "").upper()).strip()


def _normalized(block: Union[TextBlock, str]) -> str:
    return block.text if isinstance(block, TextBlock) else normalize(block)


def detect_direction(
    text: str,
    blocks: Sequence[Union[TextBlock, str]]
) -> Direction:
    """
    Определяет направление штампа.

    Args:
        text: Контекст штампа (описание - строки вокруг даты)
        blocks: Все строки страницы
    """
    glyph_text = _glyph_form(text)

    # 1. Явные стрелки в контексте
    for symbol in LEFT_ARROWS:
        if symbol in glyph_text:
            logger.debug(f"[DirectionClassifier] Стрелка '{symbol}' -> ARRIVAL")
            return Direction.ARRIVAL
    for symbol in RIGHT_ARROWS:
        if symbol in glyph_text:
            logger.debug(f"[DirectionClassifier] Стрелка '{symbol}' -> DEPARTURE")
            return Direction.DEPARTURE

    # 2. Стрелочные паттерны по нормализованным строкам
    for block in blocks:
        line = _normalized(block)
        if any(p.search(line) for p in DEPARTURE_PATTERNS):
            logger.debug(f"[DirectionClassifier] Паттерн вылета в '{line}'")
            return Direction.DEPARTURE
        if any(p.search(line) for p in ARRIVAL_PATTERNS):
            logger.debug(f"[DirectionClassifier] Паттерн прилёта в '{line}'")
            return Direction.ARRIVAL

    # 3. Ключевые слова
    normalized = normalize(text)
    for keyword in DEPARTURE_KEYWORDS:
        if keyword in normalized:
            logger.debug(f"[DirectionClassifier] Ключевое слово '{keyword}' -> DEPARTURE")
            return Direction.DEPARTURE
    for keyword in ARRIVAL_KEYWORDS:
        if keyword in normalized:
            logger.debug(f"[DirectionClassifier] Ключевое слово '{keyword}' -> ARRIVAL")
            return Direction.ARRIVAL

    return Direction.ARRIVAL
