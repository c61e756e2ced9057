"""
Dépendances partagées de l'application web.

Fournit l'accès au Container DI et la validation des paramètres de route
typés : une valeur hors du domaine attendu produit une réponse 400 avant
d'atteindre la logique métier.
"""

from fastapi import HTTPException, Request

from ..container import Container
from ..core.value_objects.identifiers import IdentifierType, valid_identifier_types
from ..core.value_objects.media_type import MediaType
from ..core.value_objects.parameter import Parameter


def get_container(request: Request) -> Container:
    """Retourne le Container initialisé au démarrage de l'application."""
    return request.app.state.container


def media_type_param(media_type: str) -> MediaType:
    """Valide le segment {media_type} d'une route (Books, movies, 2...)."""
    parameter = Parameter.parse(MediaType, media_type)
    if not parameter.is_valid:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid media type: {media_type}. Valid types are: {MediaType.valid_types()}",
        )
    return parameter.value


def identifier_type_param(identifier_type: str) -> IdentifierType:
    """Valide le segment {identifier_type} d'une route (isbn, upc...)."""
    parameter = Parameter.parse(IdentifierType, identifier_type)
    if not parameter.is_valid:
        raise HTTPException(
            status_code=400,
            detail=(
                f"Invalid identifier type: {identifier_type}. "
                f"Valid types are: {valid_identifier_types()}"
            ),
        )
    return parameter.value
