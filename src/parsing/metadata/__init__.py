"""
Метаданные штампа: нормализация даты.
"""

from .date_normalizer import format_date

__all__ = ["format_date"]
