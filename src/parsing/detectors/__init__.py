"""
Детекторы штампа: страна, аэропорт, направление.

Каждый детектор всегда возвращает догадку, ошибок наружу не бросает.
"""

from .detection_result import DetectionResult
from .country_resolver import detect_country
from .airport_resolver import detect_airport
from .direction_classifier import detect_direction

__all__ = [
    "DetectionResult",
    "detect_country",
    "detect_airport",
    "detect_direction",
]
