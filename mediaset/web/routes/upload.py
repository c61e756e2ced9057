"""
Route d'import d'un export tabulaire (formulaire multipart).
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, UploadFile

from ...container import Container
from ...core.value_objects.media_type import MediaType
from ...services.upload.service import UploadFormatError
from ..deps import get_container, media_type_param

router = APIRouter(tags=["upload"])


@router.post("/{media_type}/upload")
async def upload_file(
    file: UploadFile,
    media_type: MediaType = Depends(media_type_param),
    container: Container = Depends(get_container),
) -> dict:
    """
    Importe un fichier délimité par ';' dont la première ligne est l'en-tête.

    Retourne le nombre d'entités créées, les lignes vides ignorées, les
    lignes rejetées et les cellules mal formées.
    """
    raw = await file.read()
    try:
        content = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded.")

    service = container.upload_service()
    try:
        report = service.upload_content(media_type, content)
    except UploadFormatError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "mediaType": media_type.label,
        "created": report.created_count,
        "ids": [entity.id for entity in report.created],
        "skippedEmpty": report.skipped_empty,
        "rejectedRows": report.rejected_rows,
        "warnings": [asdict(warning) for warning in report.warnings],
    }
