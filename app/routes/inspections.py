import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from app import inspection_store
from app.config.database import get_db
from app.dependencies.auth import get_current_admin_user, get_current_auditor_user
from app.models.inspection import InspectionRecord
from app.notifications import get_push_sender, notify_new_inspection
from app.schemas.inspection import InspectionCreate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/inspections", response_model=InspectionRecord, status_code=201)
async def create_inspection(
    inspection: InspectionCreate,
    background_tasks: BackgroundTasks,
    current_user: dict = Depends(get_current_auditor_user),
    db=Depends(get_db),
    send_multicast=Depends(get_push_sender),
):
    try:
        record = inspection_store.create_inspection(db, inspection)
    except Exception as e:
        logger.exception("Error al crear la inspección")
        raise HTTPException(status_code=500, detail=f"Error al crear la inspección: {str(e)}")

    # La notificacion corre despues de responder; sus errores no afectan la creacion
    background_tasks.add_task(notify_new_inspection, record.model_dump(mode="json", exclude={"photos"}), db, send_multicast)
    return record


@router.get("/inspections", response_model=List[InspectionRecord])
async def get_inspections(
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    current_user: dict = Depends(get_current_auditor_user),
    db=Depends(get_db),
):
    if date_from and date_to and date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from no puede ser posterior a date_to")
    try:
        inspections = inspection_store.list_inspections(db, date_from, date_to)
    except Exception as e:
        logger.exception("Error al obtener las inspecciones")
        raise HTTPException(status_code=500, detail=f"Error al obtener las inspecciones: {str(e)}")
    logger.debug("Inspecciones devueltas: %d", len(inspections))
    return inspections


@router.get("/inspections/{inspection_id}", response_model=InspectionRecord)
async def get_inspection(
    inspection_id: str,
    current_user: dict = Depends(get_current_auditor_user),
    db=Depends(get_db),
):
    try:
        record = inspection_store.get_inspection(db, inspection_id)
    except Exception as e:
        logger.exception("Error al obtener la inspección %s", inspection_id)
        raise HTTPException(status_code=500, detail=f"Error al obtener la inspección: {str(e)}")
    if record is None:
        raise HTTPException(status_code=404, detail="Inspección no encontrada")
    return record


@router.delete("/inspections/{inspection_id}")
async def delete_inspection(
    inspection_id: str,
    current_user: dict = Depends(get_current_admin_user),
    db=Depends(get_db),
):
    try:
        deleted = inspection_store.delete_inspection(db, inspection_id)
    except Exception as e:
        logger.exception("Error al eliminar la inspección %s", inspection_id)
        raise HTTPException(status_code=500, detail=f"Error al eliminar la inspección: {str(e)}")
    if not deleted:
        raise HTTPException(status_code=404, detail="Inspección no encontrada")
    return {"message": f"Inspección {inspection_id} eliminada exitosamente"}
