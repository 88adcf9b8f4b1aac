import base64
import json
import logging

import firebase_admin
from firebase_admin import credentials, firestore

from app.config import settings

logger = logging.getLogger(__name__)

REQUIRED_CREDENTIAL_FIELDS = ["type", "project_id", "private_key_id", "private_key", "client_email", "client_id"]


class FirebaseConfigError(Exception):
    """Credenciales de Firebase ausentes o invalidas."""


def load_credentials(encoded_credentials):
    """Decodifica FIREBASE_CREDENTIALS (JSON en base64) y valida los campos obligatorios."""
    if not encoded_credentials:
        raise FirebaseConfigError("FIREBASE_CREDENTIALS no está configurado")
    try:
        cred_data = json.loads(base64.b64decode(encoded_credentials).decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as e:
        raise FirebaseConfigError(f"No se pudo decodificar FIREBASE_CREDENTIALS: {e}") from e
    missing = [field for field in REQUIRED_CREDENTIAL_FIELDS if field not in cred_data]
    if missing:
        raise FirebaseConfigError(f"Credenciales de Firebase incompletas, faltan: {', '.join(missing)}")
    return cred_data


def initialize_firebase():
    if not firebase_admin._apps:
        cred_data = load_credentials(settings.FIREBASE_CREDENTIALS)
        cred = credentials.Certificate(cred_data)
        firebase_admin.initialize_app(cred, {"projectId": cred_data["project_id"]})
        logger.info("Firebase Admin SDK inicializado para el proyecto %s", cred_data["project_id"])
    return firestore.client()
