"""
DTO контракт: D2 (Parsing) -> потребители (API, хранилище, карта)

Кандидаты штампов, найденные на странице паспорта, и их сохраняемая форма.

ВАЖНО: to_record()/from_record() сохраняют имена полей записи
(Sl_no, Country, Airport_Name_with_location, ...), которые ждёт фронтенд
и коллекция Passport в хранилище.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from contracts.d1_extraction_dto import BoundingPoly


class Direction(str, Enum):
    """Направление пересечения границы."""
    ARRIVAL = "ARRIVAL"
    DEPARTURE = "DEPARTURE"


@dataclass(frozen=True)
class TextBlock:
    """
    Строка текста страницы.

    text - нормализованный текст (для поиска по справочникам)
    raw_text - текст как его вернул OCR (для описания и даты)
    index - номер строки на странице
    """
    text: str
    raw_text: str
    index: int


class CandidateStamp(BaseModel):
    """
    Кандидат штампа - результат сегментации страницы до ручной проверки.
    """

    sl_no: int = Field(..., ge=1, description="Порядковый номер на странице (с 1)")
    country: str = Field(..., description="Страна")
    airport: str = Field(..., description="Аэропорт")
    direction: Direction = Field(Direction.ARRIVAL, description="Прилёт/вылет")
    date: str = Field("", description="Дата DD/MM/YYYY или пустая строка")
    description: str = Field("", description="Строки вокруг даты")
    confidence: float = Field(..., ge=0.0, le=1.0, description="min(страна, аэропорт)")
    bounding_poly: Optional[BoundingPoly] = Field(None, description="Полигон области текста")
    stamp_id: Optional[str] = Field(None, description="Уникальный ID штампа (имя файла картинки)")

    model_config = ConfigDict(frozen=True)


class PassportEntry(BaseModel):
    """
    Сохраняемая запись штампа (после вырезания картинки).

    Владелец после сохранения - хранилище; ядро только создаёт записи.
    """

    sl_no: int = Field(1, ge=1)
    country: str = ""
    airport: str = ""
    direction: Direction = Direction.ARRIVAL
    date: str = ""
    description: str = ""
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    stamp_image: str = Field("", description="Ссылка на вырезанный штамп или пустая строка")
    is_manual_entry: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_candidate(cls, candidate: CandidateStamp, stamp_image: str = "") -> "PassportEntry":
        return cls(
            sl_no=candidate.sl_no,
            country=candidate.country,
            airport=candidate.airport,
            direction=candidate.direction,
            date=candidate.date,
            description=candidate.description,
            confidence=candidate.confidence,
            stamp_image=stamp_image,
        )

    @classmethod
    def manual_placeholder(cls, sl_no: int = 1) -> "PassportEntry":
        """Пустая строка для ручного заполнения (если штампы не найдены)."""
        return cls(sl_no=sl_no, is_manual_entry=True)

    def cleaned(self) -> "PassportEntry":
        """Копия с обрезанными пробелами в текстовых полях (перед сохранением)."""
        return self.model_copy(update={
            "country": self.country.strip(),
            "airport": self.airport.strip(),
            "date": self.date.strip(),
            "description": self.description.strip(),
        })

    def to_record(self) -> Dict[str, Any]:
        """Преобразует в формат записи хранилища/фронтенда."""
        record: Dict[str, Any] = {
            "Sl_no": str(self.sl_no),
            "Country": self.country,
            "Airport_Name_with_location": self.airport,
            "Arrival_Departure": self.direction.value,
            "Date": self.date,
            "Description": self.description,
            "StampImage": self.stamp_image,
            "isManualEntry": self.is_manual_entry,
        }
        if self.confidence is not None:
            record["confidence"] = self.confidence
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "PassportEntry":
        """Создает запись из формата хранилища (десериализация из JSON)."""
        direction = str(record.get("Arrival_Departure") or "ARRIVAL").strip().upper()
        try:
            sl_no = int(record.get("Sl_no") or 1)
        except (TypeError, ValueError):
            sl_no = 1
        return cls(
            sl_no=max(sl_no, 1),
            country=record.get("Country") or "",
            airport=record.get("Airport_Name_with_location") or "",
            direction=Direction(direction) if direction in Direction.__members__ else Direction.ARRIVAL,
            date=record.get("Date") or "",
            description=record.get("Description") or "",
            confidence=record.get("confidence"),
            stamp_image=record.get("StampImage") or "",
            is_manual_entry=bool(record.get("isManualEntry", False)),
        )
