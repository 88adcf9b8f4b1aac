from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class AreaCount(BaseModel):
    area: str
    count: int


class RiskTypeCount(BaseModel):
    risk_type: str
    count: int


class TrendAnalysis(BaseModel):
    most_frequent_areas: List[AreaCount] = Field(description="Áreas con más inspecciones y su conteo")
    most_frequent_risk_types: List[RiskTypeCount] = Field(description="Tipos de riesgo más frecuentes y su conteo")
    risk_summary: str = Field(description="Resumen de las tendencias de riesgo y oportunidades de mejora")


class RiskForecast(BaseModel):
    predicted_incidents: str = Field(description="Incidentes de seguridad que podrían ocurrir")
    reasoning: str = Field(description="Razonamiento basado en el historial y las tendencias")
    preventative_actions: str = Field(description="Acciones preventivas sugeridas")


class DashboardStats(BaseModel):
    date_from: date
    date_to: date
    total: int
    resolved: int
    in_progress: int
    high_potential: int


class AnalysisRequest(BaseModel):
    date_from: Optional[date] = None
    date_to: Optional[date] = None


class AnalysisOut(BaseModel):
    date_from: date
    date_to: date
    has_data: bool
    inspection_count: int = 0
    trends: Optional[TrendAnalysis] = None
    forecast: Optional[RiskForecast] = None
    cached: bool = False
