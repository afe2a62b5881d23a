"""
Сегментация страницы паспорта на кандидатов штампов.

ЦКП: список CandidateStamp (по одному на каждую строку с датой).

Входные данные: полный текст страницы (первая аннотация OCR)
Выходные данные: List[CandidateStamp]

Алгоритм:
1. Разбить текст на непустые строки (TextBlock)
2. Каждая строка с датой (или шаблоном DD.MM.YY) - якорь штампа
3. Описание = строки [i-3, i+3] вокруг якоря
4. Страна - по всей странице, аэропорт - по всем строкам,
   направление - по описанию и всем строкам, дата - по строке-якорю

Перекрывающиеся окна не объединяются: две соседние даты дают два кандидата.
"""

import re
import uuid
from typing import List, Optional

from loguru import logger

from config.settings import DESCRIPTION_WINDOW
from contracts.d1_extraction_dto import BoundingPoly
from contracts.stamp_dto import CandidateStamp, TextBlock
from src.parsing.detectors import detect_airport, detect_country, detect_direction
from src.parsing.knowledge import KnowledgeBase, load_knowledge_base
from src.parsing.metadata.date_normalizer import DATE_SEARCH_RE, format_date
from src.parsing.text_normalizer import normalize

# Незаполненный шаблон даты на штампе (точка - любой символ, как в исходном шаблоне)
DATE_PLACEHOLDER_RE = re.compile(r"DD.MM.YY")


def split_blocks(page_text: str) -> List[TextBlock]:
    """Непустые строки страницы в порядке чтения."""
    blocks = []
    for line in (page_text or "").split("\n"):
        if not line.strip():
            continue
        blocks.append(TextBlock(text=normalize(line), raw_text=line, index=len(blocks)))
    return blocks


def is_date_anchor(block: TextBlock) -> bool:
    return bool(DATE_SEARCH_RE.search(block.raw_text) or DATE_PLACEHOLDER_RE.search(block.raw_text))


class StampSegmenter:
    """
    Находит штампы на странице и классифицирует каждый.

    Без состояния между вызовами; справочник только читается.
    """

    def __init__(
        self,
        knowledge: Optional[KnowledgeBase] = None,
        window: int = DESCRIPTION_WINDOW
    ):
        self.knowledge = knowledge or load_knowledge_base()
        self.window = window

    def describe(self, blocks: List[TextBlock], index: int) -> str:
        """Сырые строки окна [i - window, i + window] через перевод строки."""
        start = max(0, index - self.window)
        end = min(len(blocks), index + self.window + 1)
        return "\n".join(block.raw_text for block in blocks[start:end])

    def extract(
        self,
        page_text: str,
        blocks: Optional[List[TextBlock]] = None,
        bounding_poly: Optional[BoundingPoly] = None
    ) -> List[CandidateStamp]:
        """
        Извлекает кандидатов штампов.

        Args:
            page_text: Полный текст страницы
            blocks: Уже разбитые строки (если None - разбиваем page_text)
            bounding_poly: Полигон текстовой области, передаётся каждому кандидату

        Returns:
            Список кандидатов; [] если дат на странице нет
        """
        if blocks is None:
            blocks = split_blocks(page_text)

        anchors = [i for i, block in enumerate(blocks) if is_date_anchor(block)]
        if not anchors:
            logger.info("[StampSegmenter] Строк с датой не найдено")
            return []

        # Страна и аэропорт считаются по всей странице - одинаковы для всех кандидатов
        country = detect_country(page_text, self.knowledge)
        airport = detect_airport(blocks, country.value, self.knowledge)
        confidence = min(country.confidence, airport.confidence)

        candidates = []
        for sl_no, index in enumerate(anchors, start=1):
            description = self.describe(blocks, index)
            candidates.append(CandidateStamp(
                sl_no=sl_no,
                country=country.value,
                airport=airport.value,
                direction=detect_direction(description, blocks),
                date=format_date(blocks[index].raw_text),
                description=description,
                confidence=confidence,
                bounding_poly=bounding_poly,
                stamp_id=uuid.uuid4().hex,
            ))

        logger.info(
            f"[StampSegmenter] Найдено штампов: {len(candidates)} "
            f"(страна: {country.value}, аэропорт: {airport.value})"
        )
        return candidates


def extract_stamps(
    page_text: str,
    blocks: Optional[List[TextBlock]] = None,
    bounding_poly: Optional[BoundingPoly] = None
) -> List[CandidateStamp]:
    """Точка входа: сегментация со справочником по умолчанию."""
    return StampSegmenter().extract(page_text, blocks=blocks, bounding_poly=bounding_poly)
