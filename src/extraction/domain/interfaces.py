"""
Интерфейсы (абстрактные классы) для домена Extraction.

Домен Extraction отвечает за:
1. OCR распознавание страницы паспорта
2. Вырезание картинок штампов
3. Сборку записей PassportEntry для страницы
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from contracts.d1_extraction_dto import OcrPage
from contracts.stamp_dto import PassportEntry


class IOCRProvider(ABC):
    """Интерфейс для провайдеров OCR (домен Extraction)."""

    @abstractmethod
    def recognize(self, image_content: bytes, source_file: str = "unknown") -> OcrPage:
        """
        Распознаёт текст на изображении.

        Args:
            image_content: Байты изображения
            source_file: Имя исходного файла (для метаданных)

        Returns:
            OcrPage: аннотации в порядке провайдера (первая - вся страница)
        """
        pass

    @abstractmethod
    def recognize_from_file(self, image_path: Path) -> OcrPage:
        """
        Распознаёт текст из файла изображения.

        Args:
            image_path: Путь к файлу изображения
        """
        pass


class IPagePipeline(ABC):
    """Интерфейс пайплайна страницы паспорта (домен Extraction)."""

    @abstractmethod
    def process_page(self, image_path: Path) -> List[PassportEntry]:
        """
        Фото страницы -> записи штампов.

        Никогда не бросает исключений: ошибки страницы дают [].
        """
        pass
