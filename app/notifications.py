"""Notificaciones push al registrar una inspeccion nueva.

El trabajo se ejecuta en segundo plano despues de guardar la inspeccion: lee
todos los tokens de "fcmTokens", envia el mismo mensaje a cada dispositivo y
elimina los tokens que FCM reporta como invalidos de forma permanente. Puede
ejecutarse mas de una vez para la misma inspeccion; en ese caso un dispositivo
recibe la notificacion duplicada.
"""
import asyncio
import logging
from dataclasses import dataclass

from firebase_admin import exceptions, messaging
from google.api_core.exceptions import GoogleAPIError

from app.config.settings import (
    FCM_MULTICAST_LIMIT,
    FCM_TOKENS_COLLECTION,
    NOTIFICATION_CLICK_ACTION,
    NOTIFICATION_TITLE,
    UNKNOWN_AREA_TEXT,
)
from app.models.device_token import DeviceTokenRecord

logger = logging.getLogger(__name__)


@dataclass
class FanOutResult:
    tokens: int = 0
    failures: int = 0
    removed: int = 0


def build_message(area, tokens):
    return messaging.MulticastMessage(
        tokens=tokens,
        notification=messaging.Notification(
            title=NOTIFICATION_TITLE,
            body=f"Se registró una nueva inspección en el área '{area}'.",
        ),
        data={"click_action": NOTIFICATION_CLICK_ACTION},
    )


def is_invalid_token_error(error):
    """True para token no registrado o token de registro invalido."""
    if isinstance(error, messaging.UnregisteredError):
        return True
    return isinstance(error, exceptions.InvalidArgumentError) and "registration token" in str(error).lower()


def _read_tokens(db):
    tokens = []
    for snapshot in db.collection(FCM_TOKENS_COLLECTION).stream():
        record = DeviceTokenRecord.from_snapshot(snapshot)
        if not record.token:
            logger.warning("Documento %s sin token, se omite", record.id)
            continue
        tokens.append((snapshot.reference, record))
    return tokens


def _delete_token(reference, record):
    try:
        reference.delete()
        logger.info("Token inválido eliminado: %s", record.token)
        return True
    except GoogleAPIError as e:
        logger.error("No se pudo eliminar el token %s: %s", record.token, e)
        return False


async def notify_new_inspection(inspection, db, send_multicast=messaging.send_each_for_multicast):
    """Notifica a todos los dispositivos registrados sobre una inspeccion nueva.

    Nunca lanza excepciones: cualquier error al leer los tokens o al enviar
    corta el resto del envio y queda registrado en el log.
    """
    area = (inspection or {}).get("area") or UNKNOWN_AREA_TEXT
    result = FanOutResult()
    try:
        tokens = await asyncio.to_thread(_read_tokens, db)
        if not tokens:
            logger.info("No hay tokens de dispositivos registrados.")
            return result

        result.tokens = len(tokens)
        logger.info("Enviando notificación de '%s' a %d dispositivo(s)", area, len(tokens))
        for start in range(0, len(tokens), FCM_MULTICAST_LIMIT):
            chunk = tokens[start:start + FCM_MULTICAST_LIMIT]
            message = build_message(area, [record.token for _, record in chunk])
            response = await asyncio.to_thread(send_multicast, message)
            logger.info("Respuesta de FCM: %d enviados, %d fallidos", response.success_count, response.failure_count)

            for (reference, record), send_response in zip(chunk, response.responses):
                if send_response.success:
                    continue
                result.failures += 1
                logger.error("Falló el envío al token %s: %s", record.token, send_response.exception)
                if is_invalid_token_error(send_response.exception):
                    if await asyncio.to_thread(_delete_token, reference, record):
                        result.removed += 1
    except Exception:
        logger.exception("Error al enviar notificaciones de la inspección en '%s'", area)
    return result


def get_push_sender():
    """Dependencia de FastAPI: funcion de envio multicast de FCM."""
    return messaging.send_each_for_multicast
