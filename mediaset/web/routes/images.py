"""
Route de recherche immédiate de l'image de couverture d'une entité.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from ...container import Container
from ...core.value_objects.media_type import MediaType
from ..deps import get_container, media_type_param

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/{media_type}/{entity_id}/lookup")
async def lookup_image(
    entity_id: str,
    force: bool = False,
    media_type: MediaType = Depends(media_type_param),
    container: Container = Depends(get_container),
) -> dict:
    """
    Recherche et enregistre l'image de couverture d'une entité.

    Une entité en échec permanent n'est pas retentée, sauf avec ?force=true.
    """
    repository = container.entity_repository()
    entity = repository.get_by_id(media_type, entity_id)
    if entity is None:
        raise HTTPException(status_code=404, detail=f"{media_type.label} {entity_id} not found")

    if entity.image_lookup and entity.image_lookup.permanent_failure and not force:
        raise HTTPException(
            status_code=409,
            detail=f"Image lookup permanently failed: {entity.image_lookup.failure_reason}",
        )

    service = container.image_lookup_service()
    result = await service.lookup_and_save_image(entity)
    repository.save(entity)

    return {
        "success": result.success,
        "imageUrl": result.image_url,
        "coverImage": asdict(result.saved_image) if result.saved_image else None,
        "errorMessage": result.error_message,
        "permanentFailure": result.permanent_failure,
    }
