"""
Адаптер для GoogleVisionOCR, реализующий интерфейс IOCRProvider (домен Extraction).

Позволяет использовать GoogleVisionOCR через единый интерфейс домена Extraction
и приводит любые ошибки клиента к исключениям домена.

ВАЖНО: Возвращает OcrPage из contracts/d1_extraction_dto.py
"""

from pathlib import Path
from typing import Optional
from loguru import logger

from ...domain.interfaces import IOCRProvider
from ...domain.exceptions import OCRProcessingError, OCRProviderError, OCRResponseError
from ...ocr.google_vision_ocr import GoogleVisionOCR
from contracts.d1_extraction_dto import OcrPage


class GoogleVisionOCRAdapter(IOCRProvider):
    """
    Адаптер для GoogleVisionOCR (домен Extraction).

    Реализует интерфейс IOCRProvider, делегируя вызовы GoogleVisionOCR.
    """

    def __init__(self, credentials_path: Optional[str] = None, ocr: Optional[GoogleVisionOCR] = None):
        """
        Инициализация адаптера.

        Args:
            credentials_path: Путь к credentials файлу Google Cloud
            ocr: Готовый GoogleVisionOCR (для тестов и переиспользования клиента)
        """
        if ocr is not None:
            self._ocr = ocr
            return

        try:
            self._ocr = GoogleVisionOCR(credentials_path)
            logger.debug("[Extraction] GoogleVisionOCRAdapter инициализирован")
        except Exception as e:
            raise OCRProviderError(
                message="Не удалось инициализировать GoogleVisionOCR",
                component="GoogleVisionOCRAdapter",
                original_error=e
            )

    def recognize(self, image_content: bytes, source_file: str = "unknown") -> OcrPage:
        """
        Распознает текст на изображении.

        Raises:
            OCRResponseError: Если произошла ошибка при распознавании
        """
        try:
            logger.debug("[Extraction] Вызов GoogleVisionOCR.recognize()")
            return self._ocr.recognize(image_content, source_file)
        except OCRProcessingError:
            raise
        except Exception as e:
            raise OCRResponseError(
                message="Ошибка при распознавании текста",
                component="GoogleVisionOCRAdapter",
                original_error=e
            )

    def recognize_from_file(self, image_path: Path) -> OcrPage:
        """
        Распознает текст из файла изображения.

        Raises:
            OCRResponseError: Если произошла ошибка при распознавании
        """
        try:
            logger.debug(f"[Extraction] Вызов GoogleVisionOCR.recognize_from_file() для {image_path}")
            return self._ocr.recognize_from_file(image_path)
        except OCRProcessingError:
            raise
        except Exception as e:
            raise OCRResponseError(
                message=f"Ошибка при распознавании файла: {image_path}",
                component="GoogleVisionOCRAdapter",
                original_error=e
            )
