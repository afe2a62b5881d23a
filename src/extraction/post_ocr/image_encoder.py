"""
Image Encoder для вырезанных штампов.

Кодирование numpy array в JPEG bytes.
"""

import cv2
import numpy as np
from loguru import logger

from config.settings import JPEG_QUALITY
from src.extraction.domain.exceptions import StampImageWriteError


class ImageEncoder:
    """
    Кодирует numpy array изображение в JPEG bytes.

    ЦКП: JPEG байты изображения.
    """

    @staticmethod
    def encode(image: np.ndarray, quality: int = JPEG_QUALITY) -> bytes:
        """
        Кодирует numpy array в JPEG bytes.

        Args:
            image: Изображение (BGR или Grayscale)
            quality: Качество JPEG (0-100)

        Raises:
            StampImageWriteError: Если не удалось закодировать изображение
        """
        if image is None or image.size == 0:
            raise StampImageWriteError("Cannot encode empty image", component="ImageEncoder")

        success, buffer = cv2.imencode(
            ".jpg",
            image,
            [cv2.IMWRITE_JPEG_QUALITY, quality]
        )

        if not success:
            raise StampImageWriteError("Failed to encode image to JPEG", component="ImageEncoder")

        encoded_bytes = buffer.tobytes()

        logger.debug(
            f"[ImageEncoder] Изображение закодировано: "
            f"размер {len(encoded_bytes)} байт, качество {quality}"
        )

        return encoded_bytes
