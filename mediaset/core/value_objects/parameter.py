"""
Parsing strict des parametres de route types.

Les routes recoivent des segments de chemin bruts ("books", "2", "true"...).
Parameter les convertit vers un type cible (enum, bool, date, datetime) sans
jamais lever d'exception : une entree invalide produit un Parameter avec
is_valid=False, que la couche web transforme en reponse 400.

Pour les enums, la conversion est plus stricte qu'un simple ``Enum(value)`` :
une valeur numerique n'est acceptee que si elle correspond a un membre defini.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def _try_parse_enum(target: type[Enum], text: str) -> tuple[bool, Optional[Enum]]:
    """Nom ou valeur du membre (insensible a la casse), puis entier defini."""
    if not text:
        return False, None

    lowered = text.lower()
    for member in target:
        if member.name.lower() == lowered:
            return True, member
        if isinstance(member.value, str) and member.value.lower() == lowered:
            return True, member

    # Deux etapes : parser l'entier, puis verifier qu'il est un membre defini
    if _INTEGER_PATTERN.fullmatch(text):
        number = int(text)
        for member in target:
            if member.value == number:
                return True, member
    return False, None


def _try_parse_bool(text: str) -> tuple[bool, Optional[bool]]:
    lowered = text.lower()
    if lowered == "true":
        return True, True
    if lowered == "false":
        return True, False
    return False, None


def _try_parse_datetime(text: str) -> tuple[bool, Optional[datetime]]:
    try:
        return True, datetime.fromisoformat(text)
    except ValueError:
        return False, None


def _try_parse_date(text: str) -> tuple[bool, Optional[date]]:
    try:
        return True, date.fromisoformat(text)
    except ValueError:
        return False, None


def try_parse_parameter(target: type, raw: Optional[str]) -> tuple[bool, Any]:
    """
    Convertit une valeur brute vers le type cible.

    Args:
        target: Type cible (sous-classe d'Enum, bool, date ou datetime)
        raw: Valeur brute du segment de route

    Returns:
        Tuple (succes, valeur). La valeur vaut None en cas d'echec.

    Raises:
        TypeError: Si le type cible n'est pas supporte (erreur de programmation)
    """
    if not isinstance(target, type):
        raise TypeError(f"Type de parametre non supporte : {target!r}")

    if raw is None:
        return False, None
    text = raw.strip()

    if issubclass(target, Enum):
        return _try_parse_enum(target, text)
    if target is bool:
        return _try_parse_bool(text)
    # datetime herite de date : tester datetime en premier
    if issubclass(target, datetime):
        return _try_parse_datetime(text)
    if issubclass(target, date):
        return _try_parse_date(text)

    raise TypeError(f"Type de parametre non supporte : {target!r}")


@dataclass(frozen=True)
class Parameter(Generic[T]):
    """
    Parametre de route type et valide.

    Attributes:
        raw: Valeur brute recue
        value: Valeur convertie (None si invalide)
        is_valid: True si la conversion a reussi

    Example:
        param = Parameter.parse(MediaType, "books")
        if param.is_valid:
            service.get_values(param.value, "genres")
    """

    raw: Optional[str]
    value: Optional[T]
    is_valid: bool

    @classmethod
    def parse(cls, target: type[T], raw: Optional[str]) -> "Parameter[T]":
        """Construit un Parameter a partir d'une valeur brute, sans lever."""
        success, value = try_parse_parameter(target, raw)
        return cls(raw=raw, value=value if success else None, is_valid=success)
