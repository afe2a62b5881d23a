"""
Этапы домена Parsing.

Сейчас один этап: сегментация страницы паспорта на штампы.
"""

from .stamp_segmenter import StampSegmenter, extract_stamps, split_blocks

__all__ = [
    "StampSegmenter",
    "extract_stamps",
    "split_blocks",
]
