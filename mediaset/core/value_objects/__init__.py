"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- MediaType : Categorie d'un media (BOOKS, MOVIES, GAMES, MUSICS)
- IdentifierType : Type d'identifiant externe (isbn, lccn, oclc, olid, upc, ean)
- InvalidIdentifierTypeError : Code de type d'identifiant inconnu
- Parameter : Parametre de route type et valide
"""

from mediaset.core.value_objects.media_type import MediaType
from mediaset.core.value_objects.identifiers import (
    IdentifierType,
    InvalidIdentifierTypeError,
    identifier_type_for,
    parse_identifier_type,
    try_parse_identifier_type,
    valid_identifier_types,
)
from mediaset.core.value_objects.parameter import Parameter, try_parse_parameter

__all__ = [
    "MediaType",
    "IdentifierType",
    "InvalidIdentifierTypeError",
    "identifier_type_for",
    "parse_identifier_type",
    "try_parse_identifier_type",
    "valid_identifier_types",
    "Parameter",
    "try_parse_parameter",
]
