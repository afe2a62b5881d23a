"""
Контракты DTO между доменами проекта Passport Stamps OCR.

Контракты:
- D1 -> D2: OcrPage (d1_extraction_dto.py)
- D2 -> потребители: CandidateStamp, PassportEntry (stamp_dto.py)
"""

# D1 -> D2 (Extraction -> Parsing)
from .d1_extraction_dto import OcrPage, OcrAnnotation, BoundingPoly, Vertex, OcrMetadata

# D2 -> API / хранилище
from .stamp_dto import Direction, TextBlock, CandidateStamp, PassportEntry

__all__ = [
    # D1 -> D2
    "OcrPage",
    "OcrAnnotation",
    "BoundingPoly",
    "Vertex",
    "OcrMetadata",
    # D2 -> API
    "Direction",
    "TextBlock",
    "CandidateStamp",
    "PassportEntry",
]
