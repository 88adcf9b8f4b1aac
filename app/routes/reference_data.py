"""Catalogos de areas, auditores y tipos de riesgo.

Cada catalogo es una coleccion de Firestore con documentos {"name": ...}; no se
guarda ninguna copia en memoria.
"""
import logging
from enum import Enum
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.config.database import get_db
from app.config.settings import AREAS_COLLECTION, AUDITORS_COLLECTION, RISK_TYPES_COLLECTION
from app.dependencies.auth import get_current_admin_user, get_current_user
from app.schemas.reference import NamedItemCreate, NamedItemOut, SeedResult
from app.seed import seed_risk_types

logger = logging.getLogger(__name__)

router = APIRouter()


class Catalog(str, Enum):
    AREAS = "areas"
    AUDITORS = "auditors"
    RISK_TYPES = "risk-types"


COLLECTIONS = {
    Catalog.AREAS: AREAS_COLLECTION,
    Catalog.AUDITORS: AUDITORS_COLLECTION,
    Catalog.RISK_TYPES: RISK_TYPES_COLLECTION,
}


@router.get("/catalog/{catalog}", response_model=List[NamedItemOut])
async def list_items(catalog: Catalog, current_user: dict = Depends(get_current_user), db=Depends(get_db)):
    try:
        query = db.collection(COLLECTIONS[catalog]).order_by("name")
        return [NamedItemOut(id=snapshot.id, name=snapshot.to_dict().get("name", "")) for snapshot in query.stream()]
    except Exception as e:
        logger.exception("Error al obtener el catálogo %s", catalog.value)
        raise HTTPException(status_code=500, detail=f"Error al obtener el catálogo {catalog.value}: {str(e)}")


@router.post("/admin/catalog/risk-types/seed", response_model=SeedResult)
async def seed_catalog(current_user: dict = Depends(get_current_admin_user), db=Depends(get_db)):
    try:
        count = seed_risk_types(db)
    except Exception as e:
        logger.exception("Error al cargar los tipos de riesgo")
        raise HTTPException(status_code=500, detail=f"Error al cargar los tipos de riesgo: {str(e)}")
    if count == 0:
        return SeedResult(count=0, message="Todos los tipos de riesgo ya están registrados.")
    return SeedResult(count=count, message=f"Se agregaron {count} tipos de riesgo.")


@router.post("/admin/catalog/{catalog}", response_model=NamedItemOut, status_code=201)
async def add_item(
    catalog: Catalog,
    item: NamedItemCreate,
    current_user: dict = Depends(get_current_admin_user),
    db=Depends(get_db),
):
    try:
        _, reference = db.collection(COLLECTIONS[catalog]).add({"name": item.name})
    except Exception as e:
        logger.exception("Error al agregar '%s' al catálogo %s", item.name, catalog.value)
        raise HTTPException(status_code=500, detail=f"Error al agregar al catálogo {catalog.value}: {str(e)}")
    logger.info("'%s' agregado al catálogo %s por %s", item.name, catalog.value, current_user["uid"])
    return NamedItemOut(id=reference.id, name=item.name)


@router.delete("/admin/catalog/{catalog}/{item_id}")
async def delete_item(
    catalog: Catalog,
    item_id: str,
    current_user: dict = Depends(get_current_admin_user),
    db=Depends(get_db),
):
    try:
        reference = db.collection(COLLECTIONS[catalog]).document(item_id)
        if not reference.get().exists:
            raise HTTPException(status_code=404, detail="Elemento no encontrado")
        reference.delete()
    except HTTPException as http_err:
        raise http_err
    except Exception as e:
        logger.exception("Error al eliminar %s del catálogo %s", item_id, catalog.value)
        raise HTTPException(status_code=500, detail=f"Error al eliminar del catálogo {catalog.value}: {str(e)}")
    logger.info("%s eliminado del catálogo %s", item_id, catalog.value)
    return {"message": f"Elemento {item_id} eliminado exitosamente"}
