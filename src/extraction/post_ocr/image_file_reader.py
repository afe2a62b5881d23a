"""
Image File Reader для вырезания штампов.

Чтение загруженного фото страницы и декодирование в numpy array.
"""

from pathlib import Path
from typing import Tuple

import cv2
import numpy as np
from loguru import logger

from src.extraction.domain.exceptions import ImageDecodingError, ImageNotFoundError


class ImageFileReader:
    """
    Читает изображение из файла и декодирует в numpy array.

    ЦКП: декодированное изображение (numpy.ndarray, BGR) и исходные байты.
    """

    @staticmethod
    def read(image_path: Path) -> Tuple[np.ndarray, bytes]:
        """
        Читает файл изображения и декодирует в numpy array.

        Args:
            image_path: Путь к файлу изображения

        Returns:
            Кортеж: (decoded_image, raw_bytes)

        Raises:
            ImageNotFoundError: Если файл не найден
            ImageDecodingError: Если не удалось декодировать изображение
        """
        image_path = Path(image_path)
        if not image_path.exists():
            raise ImageNotFoundError(f"Image not found: {image_path}", component="ImageFileReader")

        with open(image_path, "rb") as f:
            raw_bytes = f.read()

        nparr = np.frombuffer(raw_bytes, np.uint8)
        image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

        if image is None:
            raise ImageDecodingError(f"Failed to decode image: {image_path}", component="ImageFileReader")

        logger.debug(f"[ImageFileReader] Изображение прочитано: {image_path.name}, размер: {image.shape}")

        return image, raw_bytes
