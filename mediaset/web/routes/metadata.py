"""
Route de consultation des valeurs existantes d'un champ (formats, genres...).
"""

from fastapi import APIRouter, Depends, HTTPException

from ...container import Container
from ...core.value_objects.media_type import MediaType
from ..deps import get_container, media_type_param

router = APIRouter(prefix="/metadata", tags=["metadata"])


@router.get("/{media_type}/{property_name}")
async def get_values(
    property_name: str,
    media_type: MediaType = Depends(media_type_param),
    container: Container = Depends(get_container),
) -> list[str]:
    """Valeurs distinctes non vides du champ, triées."""
    service = container.metadata_service()
    try:
        return service.get_values(media_type, property_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
