"""
OCR: Google Vision API интеграция.

Этап 1 пайплайна extraction домена:
- Отправка фото страницы паспорта в Google Vision (text_detection)
- Получение аннотаций текста
- Формирование OcrPage (контракт D1->D2)

ВАЖНО: Возвращает OcrPage из contracts/d1_extraction_dto.py
"""

import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from google.cloud import vision
from loguru import logger

from config.settings import GOOGLE_APPLICATION_CREDENTIALS, OCR_LANGUAGE_HINTS
from contracts.d1_extraction_dto import BoundingPoly, OcrAnnotation, OcrMetadata, OcrPage, Vertex
from src.extraction.domain.exceptions import OCRResponseError


class GoogleVisionOCR:
    """
    Обёртка над Google Cloud Vision API.

    Возвращает OcrPage с:
    - annotations[0]: весь текст страницы + общий полигон
    - annotations[1:]: отдельные слова с полигонами
    """

    def __init__(self, credentials_path: Optional[str] = None, client=None):
        """
        Инициализация OCR клиента.

        Args:
            credentials_path: Путь к JSON-файлу credentials.
                            Если не указан, берётся из settings.
            client: Готовый ImageAnnotatorClient (если передан, credentials не проверяются)
        """
        self.language_hints = OCR_LANGUAGE_HINTS

        if client is not None:
            self.client = client
            logger.info("[GoogleVisionOCR] Используется переданный клиент")
            return

        creds_path = credentials_path or GOOGLE_APPLICATION_CREDENTIALS

        if not creds_path:
            raise ValueError(
                "Google credentials не указаны!\n"
                "Укажите путь в config/settings.py или передайте в конструктор."
            )

        if not Path(creds_path).exists():
            raise FileNotFoundError(f"Credentials файл не найден: {creds_path}")

        # Устанавливаем credentials через переменную окружения
        os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = str(creds_path)

        self.client = vision.ImageAnnotatorClient()

        logger.info("[GoogleVisionOCR] Клиент инициализирован")

    def recognize(
        self,
        image_content: bytes,
        source_file: str = "unknown"
    ) -> OcrPage:
        """
        Распознаёт текст на изображении.

        Args:
            image_content: Байты изображения
            source_file: Имя исходного файла (для метаданных)

        Returns:
            OcrPage: Контракт D1->D2

        Raises:
            OCRResponseError: Если Google Vision вернул ошибку
        """
        logger.debug(f"[GoogleVisionOCR] Распознавание: {source_file}")

        image = vision.Image(content=image_content)
        image_context = vision.ImageContext(language_hints=self.language_hints)

        # TEXT_DETECTION: штампы - разрозненный текст, не документ
        response = self.client.text_detection(
            image=image,
            image_context=image_context
        )

        if response.error.message:
            raise OCRResponseError(
                message=f"Google Vision API error: {response.error.message}",
                component="GoogleVisionOCR"
            )

        return self._parse_response(response, source_file)

    def _parse_response(self, response, source_file: str) -> OcrPage:
        """Преобразует text_annotations в OcrPage."""
        annotations = [
            OcrAnnotation(
                description=annotation.description or "",
                bounding_poly=self._to_polygon(annotation.bounding_poly),
            )
            for annotation in response.text_annotations
        ]

        width, height = self._page_size(response)

        logger.debug(f"[GoogleVisionOCR] Аннотаций: {len(annotations)}")

        metadata = OcrMetadata(
            source_file=source_file,
            image_width=width,
            image_height=height,
            processed_at=datetime.now().isoformat(),
        )

        return OcrPage(annotations=annotations, metadata=metadata)

    @staticmethod
    def _to_polygon(bounding_poly) -> Optional[BoundingPoly]:
        """Vision отдаёт пустой полигон, если координат нет."""
        if bounding_poly is None or not bounding_poly.vertices:
            return None
        vertices: List[Vertex] = [
            Vertex(x=int(v.x or 0), y=int(v.y or 0))
            for v in bounding_poly.vertices
        ]
        return BoundingPoly(vertices=vertices)

    @staticmethod
    def _page_size(response) -> Tuple[int, int]:
        full = response.full_text_annotation
        if full and full.pages:
            return full.pages[0].width, full.pages[0].height
        return 0, 0

    def recognize_from_file(self, image_path: Path) -> OcrPage:
        """
        Распознаёт текст из файла изображения.

        Args:
            image_path: Путь к файлу

        Returns:
            OcrPage: Контракт D1->D2
        """
        with open(image_path, "rb") as f:
            content = f.read()

        return self.recognize(content, source_file=image_path.name)
