from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Potential(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NO_DEVIATION = "NoDeviation"


class InspectionStatus(str, Enum):
    RESOLVED = "Resolved"
    IN_PROGRESS = "InProgress"
    SATISFACTORY = "Satisfactory"


class InspectionRecord(BaseModel):
    """Inspeccion de seguridad tal como se guarda en la coleccion "inspections"."""

    id: str
    created_at: Optional[str] = None
    area: str
    auditor: str
    observed_at: date
    risk_type: str
    potential: Potential
    description: str
    corrective_action: str
    responsible: str
    deadline: date  # Solo informativo, no se compara con observed_at
    status: InspectionStatus
    photos: List[str] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot):
        return cls(id=snapshot.id, **snapshot.to_dict())
