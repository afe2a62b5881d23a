"""
Результат детектора: значение + уверенность.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DetectionResult(Generic[T]):
    """
    Догадка детектора.

    confidence всегда в [0, 1], иначе ValueError при создании.
    """
    value: T
    confidence: float

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence должен быть в [0, 1], получено {self.confidence}")
