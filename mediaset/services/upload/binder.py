"""
Resolution des en-tetes de colonnes vers les champs d'entite.

Un champ qui declare un en-tete explicite n'est associe qu'a cet en-tete ;
sinon il est associe a son nom declare. La comparaison est exacte, hors
casse et espaces autour de la cellule d'en-tete.
"""

from typing import Optional, Sequence

from mediaset.core.entities.schema import FieldSpec

_BOM = "\ufeff"


def normalize_header(cell: str) -> str:
    """Nettoie une cellule d'en-tete (BOM UTF-8, espaces) et la passe en casefold."""
    return cell.replace(_BOM, "").strip().casefold()


def resolve(field: FieldSpec, header_row: Sequence[str]) -> Optional[int]:
    """
    Retourne l'index de la colonne associee a un champ.

    Args:
        field: Champ du schema d'import
        header_row: Cellules de la ligne d'en-tete, dans l'ordre

    Returns:
        Index de la premiere colonne correspondante, ou None si aucune
        (le champ garde alors sa valeur par defaut)
    """
    wanted = field.column_name.casefold()
    for index, cell in enumerate(header_row):
        if normalize_header(cell) == wanted:
            return index
    return None


def bind_columns(
    schema: Sequence[FieldSpec], header_row: Sequence[str]
) -> list[tuple[FieldSpec, int]]:
    """Associe chaque champ du schema a sa colonne, en ignorant les champs absents."""
    bindings = []
    for field in schema:
        index = resolve(field, header_row)
        if index is not None:
            bindings.append((field, index))
    return bindings
