"""
Адаптеры домена Extraction.

Содержит адаптеры для существующих компонентов, реализующие интерфейсы.
"""

from .google_vision_adapter import GoogleVisionOCRAdapter

__all__ = [
    "GoogleVisionOCRAdapter",
]
