"""
Application слой домена Extraction.

Содержит фабрики и оркестраторы для использования компонентов.
"""

from .factory import ExtractionComponentFactory
from .page_pipeline import PassportPagePipeline

__all__ = [
    "ExtractionComponentFactory",
    "PassportPagePipeline",
]
