import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth

from app.config.firebase_init import FirebaseConfigError, initialize_firebase
from app.config.settings import ROLE_ADMIN, ROLE_AUDITOR, ROLES

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)):
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token de autenticación no proporcionado",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        initialize_firebase()
        decoded_token = firebase_auth.verify_id_token(credentials.credentials)
    except (firebase_auth.InvalidIdTokenError, ValueError) as e:
        logger.warning("Token inválido: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token de autenticación inválido",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except (firebase_auth.CertificateFetchError, FirebaseConfigError) as e:
        logger.error("No se pudo verificar el token: %s", e)
        raise HTTPException(status_code=500, detail=f"Error al verificar el token: {e}")

    # El rol viene del custom claim "role" asignado con set_custom_claims.py
    role = decoded_token.get("role")
    if role not in ROLES:
        role = None
    return {"uid": decoded_token["uid"], "email": decoded_token.get("email"), "role": role}


async def get_current_auditor_user(current_user: dict = Depends(get_current_user)):
    if current_user["role"] not in (ROLE_AUDITOR, ROLE_ADMIN):
        logger.info("Acceso denegado a %s (rol: %s)", current_user["uid"], current_user["role"])
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Debes ser auditor o administrador para registrar inspecciones.",
        )
    return current_user


async def get_current_admin_user(current_user: dict = Depends(get_current_user)):
    if current_user["role"] != ROLE_ADMIN:
        logger.info("Acceso de administrador denegado a %s (rol: %s)", current_user["uid"], current_user["role"])
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No tienes permisos para acceder a esta funcionalidad. Debes ser administrador.",
        )
    return current_user
