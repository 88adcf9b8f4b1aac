"""Lectura y escritura de inspecciones en Firestore."""
import logging
from datetime import datetime, timezone

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from app.config.settings import INSPECTIONS_COLLECTION
from app.models.inspection import InspectionRecord

logger = logging.getLogger(__name__)


def list_inspections(db, date_from=None, date_to=None):
    """Inspecciones mas recientes primero, opcionalmente dentro de un rango de fechas (inclusivo)."""
    query = db.collection(INSPECTIONS_COLLECTION)
    # Las fechas se guardan como YYYY-MM-DD, asi que el orden lexicografico es el cronologico
    if date_from is not None:
        query = query.where(filter=FieldFilter("observed_at", ">=", date_from.isoformat()))
    if date_to is not None:
        query = query.where(filter=FieldFilter("observed_at", "<=", date_to.isoformat()))
    query = query.order_by("observed_at", direction=firestore.Query.DESCENDING)
    return [InspectionRecord.from_snapshot(snapshot) for snapshot in query.stream()]


def create_inspection(db, inspection):
    document = inspection.model_dump(mode="json")
    document["created_at"] = datetime.now(timezone.utc).isoformat()
    _, reference = db.collection(INSPECTIONS_COLLECTION).add(document)
    logger.info("Inspección %s creada en el área '%s' con %d foto(s)", reference.id, document["area"], len(document["photos"]))
    return InspectionRecord(id=reference.id, **document)


def get_inspection(db, inspection_id):
    snapshot = db.collection(INSPECTIONS_COLLECTION).document(inspection_id).get()
    if not snapshot.exists:
        return None
    return InspectionRecord.from_snapshot(snapshot)


def delete_inspection(db, inspection_id):
    reference = db.collection(INSPECTIONS_COLLECTION).document(inspection_id)
    if not reference.get().exists:
        return False
    reference.delete()
    logger.info("Inspección %s eliminada", inspection_id)
    return True
