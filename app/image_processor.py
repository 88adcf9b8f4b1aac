"""Compresion de fotos de inspeccion antes de adjuntarlas al formulario.

Cada archivo se valida (tipo declarado y tamaño) antes de decodificarlo. Los
archivos aceptados se redimensionan para que el lado mayor no supere
MAX_DIMENSION y se recodifican en su mismo formato, devolviendo un data URI
listo para guardarse dentro del documento de la inspeccion.
"""
import asyncio
import base64
import io
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageOps

from app.config.settings import (
    ALLOWED_IMAGE_TYPES,
    COMPRESSION_QUALITY,
    MAX_DIMENSION,
    MAX_FILE_SIZE_BYTES,
    MAX_PHOTOS,
)

logger = logging.getLogger(__name__)

FORMAT_BY_MIME = {"image/jpeg": "JPEG", "image/png": "PNG", "image/webp": "WEBP"}
QUALITY = int(COMPRESSION_QUALITY * 100)


class PhotoProcessingError(Exception):
    """No se pudo decodificar o recodificar una imagen."""


@dataclass
class IncomingPhoto:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class PhotoBatchResult:
    images: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scaled_dimensions(width: int, height: int, max_dimension: int = MAX_DIMENSION) -> Tuple[int, int]:
    """Dimensiones proporcionales con el lado mayor limitado a max_dimension."""
    if width > height:
        if width > max_dimension:
            height = max(1, _round_half_up(height * max_dimension / width))
            width = max_dimension
    elif height > max_dimension:
        width = max(1, _round_half_up(width * max_dimension / height))
        height = max_dimension
    return width, height


def validate_photo(photo: IncomingPhoto) -> Optional[str]:
    """Devuelve el mensaje de rechazo del archivo, o None si es aceptable."""
    if photo.content_type not in ALLOWED_IMAGE_TYPES:
        return f"El archivo {photo.filename} tiene un tipo no permitido ({photo.content_type or 'desconocido'}). Solo se aceptan JPEG, PNG o WEBP."
    if photo.size > MAX_FILE_SIZE_BYTES:
        max_mb = MAX_FILE_SIZE_BYTES // (1024 * 1024)
        return f"El archivo {photo.filename} excede el tamaño máximo de {max_mb}MB."
    return None


def compress_image(photo: IncomingPhoto) -> str:
    """Redimensiona y recodifica una imagen; devuelve un data URI.

    Cualquier fallo del decodificador (Pillow lanza tambien SyntaxError en PNG
    con chunks corruptos) se reporta como PhotoProcessingError.
    """
    target_format = FORMAT_BY_MIME[photo.content_type]
    try:
        with Image.open(io.BytesIO(photo.data)) as source:
            source.load()
            image = ImageOps.exif_transpose(source)
            size = scaled_dimensions(*image.size)
            if size != image.size:
                image = image.resize(size, Image.Resampling.LANCZOS)

            if target_format == "JPEG" and image.mode not in ("RGB", "L"):
                image = image.convert("RGB")
            elif target_format == "WEBP" and image.mode not in ("RGB", "RGBA"):
                image = image.convert("RGBA")

            buffer = io.BytesIO()
            if target_format == "PNG":
                image.save(buffer, format="PNG", optimize=True)
            else:
                image.save(buffer, format=target_format, quality=QUALITY)
    except Exception as e:
        raise PhotoProcessingError(f"Error al procesar {photo.filename}: {e}") from e

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:{photo.content_type};base64,{encoded}"


async def _process(photo: IncomingPhoto) -> Tuple[Optional[str], Optional[str]]:
    try:
        data_uri = await asyncio.to_thread(compress_image, photo)
    except PhotoProcessingError as e:
        logger.warning("%s", e)
        return None, f"Falló el procesamiento del archivo {photo.filename}."
    return data_uri, None


async def ingest_photos(files: Sequence[IncomingPhoto], previously_accepted: int = 0) -> PhotoBatchResult:
    """Valida y comprime un lote de fotos elegidas en una sola accion.

    Si el lote supera el maximo de fotos por inspeccion se rechaza entero con un
    unico mensaje. Los demas errores son por archivo y no detienen el resto.
    """
    if previously_accepted + len(files) > MAX_PHOTOS:
        logger.info("Lote rechazado: %d fotos previas + %d nuevas", previously_accepted, len(files))
        return PhotoBatchResult(errors=[f"Puede enviar como máximo {MAX_PHOTOS} fotos por inspección."])

    rejections = [validate_photo(photo) for photo in files]
    accepted = [photo for photo, rejection in zip(files, rejections) if rejection is None]
    outcomes = iter(await asyncio.gather(*(_process(photo) for photo in accepted)))

    result = PhotoBatchResult()
    for rejection in rejections:
        if rejection is not None:
            result.errors.append(rejection)
            continue
        data_uri, error = next(outcomes)
        if error is not None:
            result.errors.append(error)
        else:
            result.images.append(data_uri)
    logger.info("Lote de fotos procesado: %d aceptadas, %d errores", len(result.images), len(result.errors))
    return result


async def add_photos(existing: Sequence[str], files: Sequence[IncomingPhoto]) -> PhotoBatchResult:
    """Procesa un lote y lo agrega al final de las fotos ya aceptadas."""
    batch = await ingest_photos(files, previously_accepted=len(existing))
    return PhotoBatchResult(images=list(existing) + batch.images, errors=batch.errors)


def remove_photo(photos: Sequence[str], index: int) -> List[str]:
    if not 0 <= index < len(photos):
        raise IndexError(f"No existe la foto en la posición {index}")
    return list(photos[:index]) + list(photos[index + 1:])
