"""
История штампов: карта, облако слов, галерея штампов.
"""

from .analytics import (
    MISSING_COORDINATES,
    WordWeight,
    attach_coordinates,
    build_word_cloud,
    unique_stamp_images,
)

__all__ = [
    "MISSING_COORDINATES",
    "WordWeight",
    "attach_coordinates",
    "build_word_cloud",
    "unique_stamp_images",
]
