"""
Домен Extraction: OCR + вырезание штампов.

Этот домен отвечает за:
1. Выполнение OCR фото страницы паспорта через Google Vision API
2. Вырезание картинок штампов по bounding polygon
3. Сборку записей PassportEntry для страницы

Граница домена: contracts.OcrPage (вход D2), contracts.PassportEntry (выход)
"""

# Экспортируем основные классы
from .ocr.google_vision_ocr import GoogleVisionOCR
from .post_ocr.stamp_cropper import StampImageCropper, compute_crop_region

# Экспортируем application слой
from .application.factory import ExtractionComponentFactory
from .application.page_pipeline import PassportPagePipeline

__all__ = [
    # Основные классы
    "GoogleVisionOCR",
    "StampImageCropper",
    "compute_crop_region",

    # Application слой
    "ExtractionComponentFactory",
    "PassportPagePipeline",
]
