"""Data models used across the catalog."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class PropertyAssessment:
    account_number: str
    suite: str | None
    house_number: str
    street_name: str
    has_garage: bool
    neighbourhood_id: int | None
    neighbourhood: str
    ward: str
    assessed_value: int
    latitude: float
    longitude: float
    assessment_class: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
