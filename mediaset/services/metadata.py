"""
Valeurs distinctes d'un champ du catalogue (formats, genres, auteurs...).

Alimente les listes de suggestions de l'interface : les valeurs sont
dedoublonnees sans tenir compte de la casse et triees alphabetiquement.
"""

from mediaset.core.entities.schema import FieldKind, find_field
from mediaset.core.ports.repositories import IEntityRepository
from mediaset.core.value_objects.media_type import MediaType

# Seuls les champs texte et liste ont des valeurs enumerables
_ENUMERABLE_KINDS = (FieldKind.TEXT, FieldKind.LIST)


class MetadataService:
    """Service de consultation des valeurs existantes d'un champ."""

    def __init__(self, repository: IEntityRepository) -> None:
        self._repository = repository

    def get_values(self, media_type: MediaType, property_name: str) -> list[str]:
        """
        Liste les valeurs distinctes non vides d'un champ.

        Args:
            media_type: Categorie interrogee
            property_name: Nom du champ (attribut, nom declare ou en-tete)

        Returns:
            Valeurs triees sans tenir compte de la casse

        Raises:
            ValueError: Si le champ est inconnu ou non enumerable
        """
        spec = find_field(media_type, property_name)
        if spec is None or spec.kind not in _ENUMERABLE_KINDS:
            raise ValueError(
                f"Unknown property '{property_name}' for {media_type.label}"
            )

        values: dict[str, str] = {}
        for entity in self._repository.list_all(media_type):
            raw = getattr(entity, spec.attr, None)
            items = raw if isinstance(raw, list) else [raw]
            for item in items:
                if not isinstance(item, str) or not item.strip():
                    continue
                value = item.strip()
                values.setdefault(value.casefold(), value)

        return sorted(values.values(), key=str.casefold)
