"""
Модели домена Geocoding.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class GeocodeResult(BaseModel):
    """Координаты точки на карте."""

    lat: float = Field(..., description="Широта")
    lng: float = Field(..., description="Долгота")

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}
