from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.config.settings import MAX_FILE_SIZE_BYTES
from app.dependencies.auth import get_current_auditor_user
from app.image_processor import IncomingPhoto, ingest_photos
from app.schemas.photo import PhotoBatchOut

router = APIRouter()


@router.post("/photos", response_model=PhotoBatchOut)
async def upload_photos(
    files: List[UploadFile] = File(...),
    previously_accepted: int = Form(0, ge=0),
    current_user: dict = Depends(get_current_auditor_user),
):
    # Basta con leer un byte mas del limite para saber si el archivo lo excede
    incoming = [
        IncomingPhoto(filename=upload.filename or "", content_type=upload.content_type or "", data=await upload.read(MAX_FILE_SIZE_BYTES + 1))
        for upload in files
    ]
    result = await ingest_photos(incoming, previously_accepted=previously_accepted)
    return PhotoBatchOut(images=result.images, errors=result.errors)
