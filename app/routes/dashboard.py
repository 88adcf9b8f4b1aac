import logging
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.ai.analysis_cache import AnalysisCache
from app.ai.gemini_client import get_ai_client
from app.ai.risk_forecaster import forecast_risks
from app.ai.trend_spotter import analyze_trends
from app.config.database import get_db
from app.config.settings import DASHBOARD_DEFAULT_DAYS
from app.dependencies.auth import get_current_admin_user
from app.inspection_store import list_inspections
from app.models.inspection import InspectionStatus, Potential
from app.schemas.dashboard import AnalysisOut, AnalysisRequest, DashboardStats

logger = logging.getLogger(__name__)

router = APIRouter()
analysis_cache = AnalysisCache()


def resolve_range(date_from: Optional[date], date_to: Optional[date]):
    date_to = date_to or date.today()
    date_from = date_from or date_to - timedelta(days=DASHBOARD_DEFAULT_DAYS)
    if date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from no puede ser posterior a date_to")
    return date_from, date_to


def _load_inspections(db, date_from, date_to):
    try:
        return list_inspections(db, date_from, date_to)
    except Exception as e:
        logger.exception("Error al obtener las inspecciones del dashboard")
        raise HTTPException(status_code=500, detail=f"Error al obtener las inspecciones: {str(e)}")


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    current_user: dict = Depends(get_current_admin_user),
    db=Depends(get_db),
):
    date_from, date_to = resolve_range(date_from, date_to)
    inspections = _load_inspections(db, date_from, date_to)
    return DashboardStats(
        date_from=date_from,
        date_to=date_to,
        total=len(inspections),
        resolved=sum(1 for i in inspections if i.status == InspectionStatus.RESOLVED),
        in_progress=sum(1 for i in inspections if i.status == InspectionStatus.IN_PROGRESS),
        high_potential=sum(1 for i in inspections if i.potential == Potential.HIGH),
    )


@router.post("/dashboard/analysis", response_model=AnalysisOut)
async def run_analysis(
    request: AnalysisRequest,
    current_user: dict = Depends(get_current_admin_user),
    db=Depends(get_db),
    ai_client=Depends(get_ai_client),
):
    date_from, date_to = resolve_range(request.date_from, request.date_to)
    inspections = _load_inspections(db, date_from, date_to)
    if not inspections:
        return AnalysisOut(date_from=date_from, date_to=date_to, has_data=False)

    cached = analysis_cache.get(date_from, date_to, len(inspections))
    if cached is not None:
        logger.info("Análisis de %s a %s servido desde caché", date_from, date_to)
        return cached.model_copy(update={"cached": True})

    # Los AIServiceError se convierten en 502 en el manejador de app/main.py
    trends = await analyze_trends(inspections, ai_client)
    forecast = None
    if trends.risk_summary:
        forecast = await forecast_risks(inspections, trends.risk_summary, ai_client)

    result = AnalysisOut(
        date_from=date_from,
        date_to=date_to,
        has_data=True,
        inspection_count=len(inspections),
        trends=trends,
        forecast=forecast,
    )
    analysis_cache.set(date_from, date_to, len(inspections), result)
    return result
