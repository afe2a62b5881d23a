"""
Инфраструктурный слой домена Extraction.

Содержит адаптеры внешних сервисов.
"""

from .adapters.google_vision_adapter import GoogleVisionOCRAdapter

__all__ = [
    "GoogleVisionOCRAdapter",
]
