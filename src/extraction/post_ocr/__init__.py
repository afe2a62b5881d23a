"""
Post-OCR обработка: вырезание картинок штампов.
"""

from .image_file_reader import ImageFileReader
from .image_encoder import ImageEncoder
from .stamp_cropper import CropRegion, StampImageCropper, compute_crop_region

__all__ = [
    "ImageFileReader",
    "ImageEncoder",
    "CropRegion",
    "StampImageCropper",
    "compute_crop_region",
]
