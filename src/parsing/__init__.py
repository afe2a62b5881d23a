"""
Домен Parsing (D2): текст страницы паспорта -> кандидаты штампов.

Компоненты:
- text_normalizer: канонизация текста OCR
- knowledge: справочник стран, городов, аэропортов (YAML)
- detectors: страна, аэропорт, направление
- metadata: нормализация даты
- stages: сегментация страницы на штампы

Вход: contracts.OcrPage (от D1), точнее текст и полигон первой аннотации
Выход: List[contracts.CandidateStamp]
"""

from src.parsing.text_normalizer import normalize
from src.parsing.detectors import detect_country, detect_airport, detect_direction, DetectionResult
from src.parsing.metadata import format_date
from src.parsing.stages import StampSegmenter, extract_stamps, split_blocks

__all__ = [
    "normalize",
    "detect_country",
    "detect_airport",
    "detect_direction",
    "DetectionResult",
    "format_date",
    "StampSegmenter",
    "extract_stamps",
    "split_blocks",
]
