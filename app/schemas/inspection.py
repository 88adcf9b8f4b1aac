from datetime import date
from typing import List

from pydantic import BaseModel, Field, field_validator

from app.config.settings import MAX_PHOTOS
from app.models.inspection import InspectionStatus, Potential


class InspectionCreate(BaseModel):
    area: str
    auditor: str
    observed_at: date = Field(default_factory=date.today)
    risk_type: str
    potential: Potential = Potential.MEDIUM
    description: str
    corrective_action: str
    responsible: str
    deadline: date = Field(default_factory=date.today)
    status: InspectionStatus = InspectionStatus.IN_PROGRESS
    photos: List[str] = Field(default_factory=list, max_length=MAX_PHOTOS)

    @field_validator("area", "auditor", "risk_type", "description", "corrective_action", "responsible")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("El campo es obligatorio")
        return value
