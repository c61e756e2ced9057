"""
Types d'identifiants externes utilises pour interroger les services de recherche.

Chaque type est reconnu par son code court canonique (``isbn``, ``upc``...),
sans tenir compte de la casse. Le message d'erreur pour un type inconnu fait
partie du contrat : il est renvoye tel quel aux appelants de l'API.
"""

from enum import Enum
from typing import Optional

from mediaset.core.value_objects.media_type import MediaType

EAN_LENGTH = 13


class IdentifierType(Enum):
    """Type d'identifiant externe.

    La valeur de chaque membre est son code court canonique.
    """

    ISBN = "isbn"
    LCCN = "lccn"
    OCLC = "oclc"
    OLID = "olid"
    UPC = "upc"
    EAN = "ean"


class InvalidIdentifierTypeError(ValueError):
    """Levee quand un code de type d'identifiant n'est pas reconnu.

    Attributes:
        token: Le code fourni par l'appelant
    """

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(
            f"Invalid identifier type: {token}. "
            f"Valid types are: {valid_identifier_types()}"
        )


def valid_identifier_types() -> str:
    """Retourne les codes canoniques separes par des virgules."""
    return ", ".join(member.value for member in IdentifierType)


def try_parse_identifier_type(token: Optional[str]) -> Optional[IdentifierType]:
    """
    Convertit un code en IdentifierType sans lever d'exception.

    Args:
        token: Code fourni (ex: "ISBN", "ean")

    Returns:
        Le IdentifierType correspondant, ou None si le code est inconnu
    """
    if token is None:
        return None
    normalized = token.strip().lower()
    for member in IdentifierType:
        if member.value == normalized:
            return member
    return None


def parse_identifier_type(token: str) -> IdentifierType:
    """
    Convertit un code en IdentifierType.

    Raises:
        InvalidIdentifierTypeError: Si le code ne correspond a aucun type connu
    """
    identifier_type = try_parse_identifier_type(token)
    if identifier_type is None:
        raise InvalidIdentifierTypeError(token)
    return identifier_type


def identifier_type_for(media_type: MediaType, value: str) -> IdentifierType:
    """
    Determine le type d'identifiant a utiliser pour une entite.

    Les livres sont recherches par ISBN. Pour les autres categories, le
    code-barres est un EAN s'il fait 13 caracteres, un UPC sinon.

    Args:
        media_type: Categorie de l'entite
        value: Valeur de l'identifiant de recherche de l'entite

    Returns:
        Le type d'identifiant a transmettre a la strategie de recherche
    """
    if media_type == MediaType.BOOKS:
        return IdentifierType.ISBN
    if len(value) == EAN_LENGTH:
        return IdentifierType.EAN
    return IdentifierType.UPC
