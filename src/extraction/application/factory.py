"""
Фабрика для создания компонентов домена Extraction.

Предоставляет удобные методы для создания и конфигурации
всех компонентов домена Extraction через единый интерфейс.
"""

from pathlib import Path
from typing import Optional
from loguru import logger

from ..domain.interfaces import IOCRProvider
from ..infrastructure.adapters.google_vision_adapter import GoogleVisionOCRAdapter
from ..post_ocr.stamp_cropper import StampImageCropper
from .page_pipeline import PassportPagePipeline


class ExtractionComponentFactory:
    """
    Фабрика для создания компонентов домена Extraction.

    Домен Extraction отвечает за:
    - OCR распознавание страницы паспорта
    - Вырезание картинок штампов
    - Сборку PassportEntry для страницы
    """

    @staticmethod
    def create_ocr_provider(credentials_path: Optional[str] = None) -> IOCRProvider:
        """
        Создает провайдер OCR для домена Extraction.

        Args:
            credentials_path: Путь к credentials файлу Google Cloud
        """
        logger.debug("[Extraction] Создание OCR провайдера")
        return GoogleVisionOCRAdapter(credentials_path)

    @staticmethod
    def create_stamp_cropper(output_dir: Optional[Path] = None) -> StampImageCropper:
        """
        Создает вырезатель штампов.

        Args:
            output_dir: Куда сохранять JPEG (по умолчанию STAMPS_DIR)
        """
        logger.debug("[Extraction] Создание вырезателя штампов")
        if output_dir is None:
            return StampImageCropper()
        return StampImageCropper(output_dir=output_dir)

    @staticmethod
    def create_page_pipeline(
        ocr_provider: Optional[IOCRProvider] = None,
        cropper: Optional[StampImageCropper] = None,
        placeholder_on_empty: bool = False,
        delete_source: bool = False
    ) -> PassportPagePipeline:
        """
        Создает пайплайн страницы паспорта.

        Args:
            ocr_provider: Провайдер OCR (опционально)
            cropper: Вырезатель штампов (опционально)
            placeholder_on_empty: Пустая запись для ручного ввода, если штампов нет
            delete_source: Удалять загруженное фото после обработки
        """
        logger.debug("[Extraction] Создание пайплайна страницы")

        if ocr_provider is None:
            ocr_provider = ExtractionComponentFactory.create_ocr_provider()

        if cropper is None:
            cropper = ExtractionComponentFactory.create_stamp_cropper()

        return PassportPagePipeline(
            ocr_provider=ocr_provider,
            cropper=cropper,
            placeholder_on_empty=placeholder_on_empty,
            delete_source=delete_source
        )
