"""
Route de recherche des métadonnées par identifiant externe.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from ...container import Container
from ...core.ports.lookup import UnsupportedLookupError
from ...core.value_objects.identifiers import IdentifierType
from ...core.value_objects.media_type import MediaType
from ..deps import get_container, identifier_type_param, media_type_param

router = APIRouter(prefix="/lookup", tags=["lookup"])


@router.get("/{media_type}/{identifier_type}/{value}")
async def lookup(
    value: str,
    media_type: MediaType = Depends(media_type_param),
    identifier_type: IdentifierType = Depends(identifier_type_param),
    container: Container = Depends(get_container),
) -> dict:
    """Recherche un média (ex: /lookup/books/isbn/9780441172719)."""
    factory = container.strategy_factory()
    try:
        strategy = factory.get_strategy(media_type, identifier_type)
    except UnsupportedLookupError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response = await strategy.lookup(identifier_type, value)
    if response is None:
        raise HTTPException(
            status_code=404,
            detail=f"No {media_type.label.lower()} found for {identifier_type.value} {value}",
        )
    return asdict(response)
