"""
Registre des convertisseurs de valeurs pour l'import tabulaire.

Chaque convertisseur est une fonction pure ``str -> valeur`` qui leve
ConversionError quand la cellule est mal formee. Le registre associe un
type logique (FieldKind ou un nom libre) a son convertisseur ; un type
inconnu laisse passer la valeur brute sans modification.

Types fournis:
- boolean : "true"/"false" (insensible a la casse), sinon "1" vaut vrai
- duration : "H:MM" en minutes totales, ou entier brut en minutes
- integer : entier ASCII, independant de la locale
- date : date ISO stricte (AAAA-MM-JJ)
- list : segments separes par "|", nettoyes, segments vides ignores
"""

import re
from datetime import date
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union

from mediaset.core.entities.schema import FieldKind
from mediaset.core.value_objects.parameter import try_parse_parameter

LIST_DELIMITER = "|"

_ASCII_INTEGER = re.compile(r"[+-]?[0-9]+")
_ASCII_DIGITS = re.compile(r"[0-9]+")
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

Converter = Callable[[str], Any]


class ConversionError(ValueError):
    """
    Levee quand une cellule ne peut pas etre convertie.

    Attributes:
        kind: Type logique demande
        value: Valeur brute de la cellule
        reason: Cause lisible
    """

    def __init__(self, kind: str, value: str, reason: str) -> None:
        self.kind = kind
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot convert {value!r} to {kind}: {reason}")


def _parse_int(kind: str, raw: str, text: str) -> int:
    if not _ASCII_INTEGER.fullmatch(text):
        raise ConversionError(kind, raw, f"{text!r} is not an integer")
    return int(text)


def _parse_duration_part(raw: str, text: str) -> int:
    if not _ASCII_DIGITS.fullmatch(text):
        raise ConversionError("duration", raw, f"{text!r} is not an unsigned integer")
    return int(text)


def convert_boolean(raw: str) -> bool:
    """Convertisseur permissif : ne leve jamais."""
    text = raw.strip()
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return text == "1"


def convert_duration(raw: str) -> Optional[int]:
    """Convertit "H:MM" ou un nombre de minutes en minutes totales."""
    text = raw.strip()
    if not text:
        return None
    if ":" in text:
        hours, _, minutes = text.partition(":")
        return (
            _parse_duration_part(raw, hours.strip()) * 60
            + _parse_duration_part(raw, minutes.strip())
        )
    return _parse_duration_part(raw, text)


def convert_integer(raw: str) -> Optional[int]:
    """Entier optionnel : cellule vide -> None."""
    text = raw.strip()
    if not text:
        return None
    return _parse_int("integer", raw, text)


def convert_date(raw: str) -> Optional[date]:
    """Date ISO stricte : cellule vide -> None."""
    text = raw.strip()
    if not text:
        return None
    if not _ISO_DATE.fullmatch(text):
        raise ConversionError("date", raw, "expected YYYY-MM-DD")
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise ConversionError("date", raw, str(e)) from e


def convert_list(raw: str) -> list[str]:
    """Decoupe sur "|", nettoie chaque segment et ignore les segments vides."""
    segments = (segment.strip() for segment in raw.split(LIST_DELIMITER))
    return [segment for segment in segments if segment]


class EnumConverter:
    """
    Convertisseur strict vers une enum.

    Accepte le nom ou la valeur d'un membre (insensible a la casse) et
    n'accepte une valeur numerique que si elle correspond a un membre defini.

    Example:
        registry.register("media_type", EnumConverter(MediaType))
        registry.convert("media_type", "movies")  # MediaType.MOVIES
    """

    def __init__(self, enum_cls: type[Enum]) -> None:
        self._enum_cls = enum_cls

    def __call__(self, raw: str) -> Optional[Enum]:
        if not raw.strip():
            return None
        success, value = try_parse_parameter(self._enum_cls, raw)
        if not success:
            raise ConversionError(
                self._enum_cls.__name__, raw, "not a defined member"
            )
        return value


DEFAULT_CONVERTERS: dict[str, Converter] = {
    FieldKind.BOOLEAN.value: convert_boolean,
    FieldKind.DURATION.value: convert_duration,
    FieldKind.INTEGER.value: convert_integer,
    FieldKind.DATE.value: convert_date,
    FieldKind.LIST.value: convert_list,
}


def _kind_key(kind: Union[FieldKind, str]) -> str:
    return kind.value if isinstance(kind, Enum) else str(kind)


class ConverterRegistry:
    """
    Registre additif des convertisseurs, indexe par type logique.

    Sans etat apres construction : une instance peut etre partagee en
    lecture par plusieurs workers.

    Example:
        registry = ConverterRegistry()
        registry.convert(FieldKind.DURATION, "1:38")  # 98
        registry.convert("text", " Dune ")  # " Dune " (type inconnu)
    """

    def __init__(self, converters: Optional[Mapping[str, Converter]] = None) -> None:
        self._converters: dict[str, Converter] = dict(DEFAULT_CONVERTERS)
        if converters:
            for kind, converter in converters.items():
                self.register(kind, converter)

    def register(self, kind: Union[FieldKind, str], converter: Converter) -> None:
        """Ajoute ou remplace le convertisseur d'un type logique."""
        self._converters[_kind_key(kind)] = converter

    def has(self, kind: Union[FieldKind, str]) -> bool:
        """Verifie si un convertisseur est enregistre pour ce type."""
        return _kind_key(kind) in self._converters

    def convert(self, kind: Union[FieldKind, str], raw: str) -> Any:
        """
        Convertit une valeur brute.

        Args:
            kind: Type logique du champ cible
            raw: Valeur brute de la cellule

        Returns:
            La valeur convertie, ou raw inchangee si le type est inconnu

        Raises:
            ConversionError: Si la cellule est mal formee
        """
        key = _kind_key(kind)
        converter = self._converters.get(key)
        if converter is None:
            return raw
        try:
            return converter(raw)
        except ConversionError:
            raise
        except ValueError as e:
            raise ConversionError(key, raw, str(e)) from e
