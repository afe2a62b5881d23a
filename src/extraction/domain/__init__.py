"""
Domain слой домена Extraction.

Содержит интерфейсы (абстрактные классы) и исключения для Extraction домена.
"""

from .interfaces import (
    IOCRProvider,
    IPagePipeline,
)

from .exceptions import (
    ExtractionError,
    ImageProcessingError,
    ImageNotFoundError,
    ImageDecodingError,
    InvalidGeometryError,
    StampImageWriteError,
    OCRProcessingError,
    OCRProviderError,
    OCRResponseError,
    NoAnnotationsError,
)

__all__ = [
    # Интерфейсы
    "IOCRProvider",
    "IPagePipeline",

    # Исключения
    "ExtractionError",
    "ImageProcessingError",
    "ImageNotFoundError",
    "ImageDecodingError",
    "InvalidGeometryError",
    "StampImageWriteError",
    "OCRProcessingError",
    "OCRProviderError",
    "OCRResponseError",
    "NoAnnotationsError",
]
