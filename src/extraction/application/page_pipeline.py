"""
Пайплайн страницы паспорта.

Обрабатывает фото страницы через:
1. OCR распознавание текста (первая аннотация - вся страница)
2. Сегментацию на штампы (домен Parsing)
3. Вырезание картинки каждого штампа

ЦКП: List[PassportEntry] - записи, готовые к сохранению.

Ошибки страницы не пробрасываются: пайплайн возвращает [] и пишет в лог.
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger

from contracts.d1_extraction_dto import OcrPage
from contracts.stamp_dto import PassportEntry
from src.parsing.stages import StampSegmenter
from ..domain.exceptions import ExtractionError, ImageProcessingError, NoAnnotationsError
from ..domain.interfaces import IOCRProvider, IPagePipeline
from ..post_ocr.image_file_reader import ImageFileReader
from ..post_ocr.stamp_cropper import StampImageCropper


class PassportPagePipeline(IPagePipeline):
    """
    Пайплайн домена Extraction для одной страницы паспорта.

    Координирует:
    1. OCR (IOCRProvider)
    2. StampSegmenter
    3. StampImageCropper
    """

    def __init__(
        self,
        ocr_provider: IOCRProvider,
        segmenter: Optional[StampSegmenter] = None,
        cropper: Optional[StampImageCropper] = None,
        placeholder_on_empty: bool = False,
        delete_source: bool = False
    ):
        """
        Args:
            ocr_provider: Провайдер OCR
            segmenter: Сегментатор штампов (по умолчанию со справочником по умолчанию)
            cropper: Вырезатель штампов (None - картинки не вырезаются)
            placeholder_on_empty: Вернуть одну пустую запись для ручного ввода, если штампов нет
            delete_source: Удалить загруженное фото после обработки
        """
        self.ocr_provider = ocr_provider
        self.segmenter = segmenter or StampSegmenter()
        self.cropper = cropper
        self.placeholder_on_empty = placeholder_on_empty
        self.delete_source = delete_source

        logger.info("[Extraction] PassportPagePipeline инициализирован")

    def process_page(self, image_path: Path) -> List[PassportEntry]:
        image_path = Path(image_path)
        logger.info(f"[Extraction] Обработка страницы: {image_path.name}")

        try:
            entries = self._process(image_path)
        except NoAnnotationsError as e:
            logger.info(f"[Extraction] {e.message}")
            entries = []
        except ExtractionError as e:
            logger.error(f"[Extraction] Ошибка обработки {image_path.name}: {e}")
            entries = []
        finally:
            if self.delete_source:
                self._delete(image_path)

        if not entries and self.placeholder_on_empty:
            logger.info("[Extraction] Штампы не найдены, пустая запись для ручного ввода")
            return [PassportEntry.manual_placeholder()]

        return entries

    def _process(self, image_path: Path) -> List[PassportEntry]:
        page: OcrPage = self.ocr_provider.recognize_from_file(image_path)

        if not page.has_text:
            raise NoAnnotationsError(f"На странице нет текста: {image_path.name}", component="PassportPagePipeline")

        candidates = self.segmenter.extract(page.full_text, bounding_poly=page.page_polygon)
        if not candidates:
            return []

        image = self._read_image(image_path)

        entries = []
        for candidate in candidates:
            stamp_image = ""
            if image is not None and self.cropper is not None:
                stamp_image = self.cropper.try_crop(image, candidate.bounding_poly, candidate.stamp_id)
            entries.append(PassportEntry.from_candidate(candidate, stamp_image=stamp_image))

        logger.info(
            f"[Extraction] {image_path.name}: штампов {len(entries)}, "
            f"с картинкой {sum(1 for e in entries if e.stamp_image)}"
        )
        return entries

    def _read_image(self, image_path: Path):
        """Фото для вырезания; None если прочитать не удалось (записи остаются)."""
        if self.cropper is None:
            return None
        try:
            image, _ = ImageFileReader.read(image_path)
            return image
        except ImageProcessingError as e:
            logger.warning(f"[Extraction] Картинки штампов не будут вырезаны: {e}")
            return None

    @staticmethod
    def _delete(image_path: Path):
        try:
            image_path.unlink(missing_ok=True)
            logger.debug(f"[Extraction] Исходный файл удалён: {image_path.name}")
        except OSError as e:
            logger.warning(f"[Extraction] Не удалось удалить {image_path}: {e}")
