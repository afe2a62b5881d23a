"""
Вырезание картинки штампа по bounding polygon.

ЦКП: JPEG файл <STAMPS_DIR>/<stamp_id>.jpg и публичная ссылка на него.

Алгоритм:
1. Полигон должен иметь ровно 4 вершины
2. Прямоугольник по min/max x и y
3. Отступ 15% ширины/высоты, обрезка по границам изображения
4. Вырожденный прямоугольник -> InvalidGeometryError
5. Вырезать (floor начала, ceil размера), закодировать, записать
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
from loguru import logger

from config.settings import CROP_PADDING_PERCENT, JPEG_QUALITY, STAMPS_DIR, STAMPS_PUBLIC_PATH
from contracts.d1_extraction_dto import BoundingPoly
from src.extraction.domain.exceptions import (
    ImageProcessingError,
    InvalidGeometryError,
    StampImageWriteError,
)
from src.extraction.post_ocr.image_encoder import ImageEncoder
from src.extraction.post_ocr.image_file_reader import ImageFileReader


@dataclass(frozen=True)
class CropRegion:
    """Прямоугольник вырезания в пикселях (целые, внутри изображения)."""
    left: int
    top: int
    width: int
    height: int


def compute_crop_region(
    bounding_poly: Optional[BoundingPoly],
    image_width: int,
    image_height: int,
    padding: float = CROP_PADDING_PERCENT
) -> CropRegion:
    """
    Считает область вырезания с отступом.

    Raises:
        InvalidGeometryError: не 4 вершины или пустая область после обрезки
    """
    if bounding_poly is None or len(bounding_poly.vertices) != 4:
        raise InvalidGeometryError(
            f"Ожидается 4 вершины, получено: {bounding_poly}",
            component="StampImageCropper"
        )

    xs = [v.x for v in bounding_poly.vertices]
    ys = [v.y for v in bounding_poly.vertices]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)

    pad_x = (max_x - min_x) * padding
    pad_y = (max_y - min_y) * padding

    min_x = max(0, min_x - pad_x)
    max_x = min(image_width, max_x + pad_x)
    min_y = max(0, min_y - pad_y)
    max_y = min(image_height, max_y + pad_y)

    if min_x >= max_x or min_y >= max_y:
        raise InvalidGeometryError(
            f"Пустая область после отступов: x=[{min_x}, {max_x}], y=[{min_y}, {max_y}]",
            component="StampImageCropper"
        )

    left = math.floor(min_x)
    top = math.floor(min_y)
    width = min(math.ceil(max_x - min_x), image_width - left)
    height = min(math.ceil(max_y - min_y), image_height - top)

    return CropRegion(left=left, top=top, width=width, height=height)


class StampImageCropper:
    """
    Вырезает штампы из фото страницы и сохраняет их как JPEG.
    """

    def __init__(
        self,
        output_dir: Path = STAMPS_DIR,
        public_path: str = STAMPS_PUBLIC_PATH,
        padding: float = CROP_PADDING_PERCENT,
        quality: int = JPEG_QUALITY
    ):
        self.output_dir = Path(output_dir)
        self.public_path = public_path.rstrip("/")
        self.padding = padding
        self.quality = quality

    def crop(self, image: np.ndarray, bounding_poly: Optional[BoundingPoly]) -> np.ndarray:
        height, width = image.shape[:2]
        region = compute_crop_region(bounding_poly, width, height, self.padding)
        return image[region.top:region.top + region.height, region.left:region.left + region.width]

    def crop_and_save(
        self,
        image: Union[np.ndarray, Path],
        bounding_poly: Optional[BoundingPoly],
        stamp_id: str
    ) -> str:
        """
        Вырезает штамп и сохраняет в <output_dir>/<stamp_id>.jpg.

        Args:
            image: Декодированное изображение или путь к файлу
            bounding_poly: Полигон штампа
            stamp_id: Уникальный ID (имя файла)

        Returns:
            Публичная ссылка: <public_path>/<stamp_id>.jpg

        Raises:
            InvalidGeometryError: некорректный полигон
            ImageProcessingError: файл не прочитан или не записан
        """
        if not isinstance(image, np.ndarray):
            image, _ = ImageFileReader.read(Path(image))

        cropped = self.crop(image, bounding_poly)
        encoded = ImageEncoder.encode(cropped, quality=self.quality)

        filename = f"{stamp_id}.jpg"
        target = self.output_dir / filename
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(encoded)
        except OSError as e:
            raise StampImageWriteError(
                f"Не удалось сохранить штамп: {target}",
                component="StampImageCropper",
                original_error=e
            )

        logger.debug(f"[StampImageCropper] Штамп сохранён: {target} ({cropped.shape[1]}x{cropped.shape[0]})")
        return f"{self.public_path}/{filename}"

    def try_crop(
        self,
        image: Union[np.ndarray, Path],
        bounding_poly: Optional[BoundingPoly],
        stamp_id: str
    ) -> str:
        """
        Как crop_and_save, но без исключений: при ошибке "" (запись сохраняется без картинки).
        """
        try:
            return self.crop_and_save(image, bounding_poly, stamp_id)
        except InvalidGeometryError as e:
            logger.warning(f"[StampImageCropper] Штамп {stamp_id} пропущен: {e.message}")
        except ImageProcessingError as e:
            logger.error(f"[StampImageCropper] Ошибка вырезания {stamp_id}: {e}")
        return ""
