"""
DTO контракт: D1 (Extraction) -> D2 (Parsing)

Результат OCR обработки фотографии страницы паспорта.

Google Vision text_detection возвращает список аннотаций:
- первая аннотация - весь текст страницы + общий bounding polygon
- остальные - отдельные слова со своими полигонами

Парсинг штампов использует только первую аннотацию (текст и полигон),
слова сохраняем для отладки и будущих улучшений вырезания штампов.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Vertex:
    """
    Вершина полигона в пикселях изображения.

    Google Vision опускает нулевые координаты, поэтому по умолчанию 0.
    """
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class BoundingPoly:
    """
    Ограничивающий полигон текстовой области (обычно 4 вершины).
    """
    vertices: List[Vertex] = field(default_factory=list)

    @classmethod
    def from_points(cls, points: List[dict]) -> "BoundingPoly":
        """Создает полигон из списка словарей {"x": .., "y": ..}."""
        return cls(vertices=[
            Vertex(x=int(p.get("x") or 0), y=int(p.get("y") or 0))
            for p in points
        ])

    def to_points(self) -> List[dict]:
        return [{"x": v.x, "y": v.y} for v in self.vertices]


@dataclass(frozen=True)
class OcrAnnotation:
    """Одна текстовая аннотация Google Vision."""
    description: str
    bounding_poly: Optional[BoundingPoly] = None


@dataclass
class OcrMetadata:
    """
    Метаданные OCR обработки.
    """
    source_file: str                              # Имя исходного файла
    image_width: int                              # Ширина изображения (px)
    image_height: int                             # Высота изображения (px)
    processed_at: str                             # Timestamp обработки (ISO 8601)


@dataclass
class OcrPage:
    """
    Результат OCR одной страницы паспорта.

    Пример использования:

    if page.has_text:
        stamps = extract_stamps(page.full_text, bounding_poly=page.page_polygon)
    """

    # Аннотации в порядке Google Vision (первая - вся страница)
    annotations: List[OcrAnnotation] = field(default_factory=list)

    # Метаданные обработки
    metadata: Optional[OcrMetadata] = None

    @property
    def has_text(self) -> bool:
        return bool(self.annotations)

    @property
    def full_text(self) -> str:
        """Полный текст страницы (описание первой аннотации)."""
        if not self.annotations:
            return ""
        return self.annotations[0].description or ""

    @property
    def page_polygon(self) -> Optional[BoundingPoly]:
        """Полигон первой аннотации (вся текстовая область страницы)."""
        if not self.annotations:
            return None
        return self.annotations[0].bounding_poly

    @property
    def words(self) -> List[OcrAnnotation]:
        return self.annotations[1:]
