"""
Mapping des lignes tabulaires vers des entites typees.

RecordMapper construit une entite par ligne de donnees, en resolvant chaque
champ du schema d'import via le binder puis en convertissant la cellule via
le registre de convertisseurs.

Une cellule mal formee n'interrompt jamais le lot. Selon la politique
configuree, le champ garde sa valeur par defaut (politique "default", par
defaut) ou la ligne entiere est ecartee (politique "reject_row"). Dans les
deux cas un MappingWarning est enregistre.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from loguru import logger

from mediaset.core.entities.media import Entity, entity_class_for
from mediaset.core.entities.schema import schema_for
from mediaset.core.value_objects.media_type import MediaType
from mediaset.services.upload.binder import bind_columns
from mediaset.services.upload.converters import ConversionError, ConverterRegistry


class MalformedCellPolicy(str, Enum):
    """Traitement d'une cellule qui ne peut pas etre convertie.

    Valeurs:
        DEFAULT: Le champ garde sa valeur par defaut, la ligne est conservee
        REJECT_ROW: La ligne est ecartee du resultat
    """

    DEFAULT = "default"
    REJECT_ROW = "reject_row"


@dataclass(frozen=True)
class MappingWarning:
    """
    Cellule qui n'a pas pu etre convertie.

    Attributes:
        row_number: Numero de la ligne de donnees (1 = premiere ligne apres l'en-tete)
        field: Nom declare du champ
        value: Valeur brute de la cellule
        reason: Cause lisible
    """

    row_number: int
    field: str
    value: str
    reason: str


@dataclass
class MappingResult:
    """
    Resultat du mapping d'un lot.

    Attributes:
        entities: Entites produites, dans l'ordre des lignes, sans ID
        warnings: Cellules mal formees
        rejected_rows: Numeros des lignes ecartees (politique REJECT_ROW)
    """

    entities: list[Entity] = field(default_factory=list)
    warnings: list[MappingWarning] = field(default_factory=list)
    rejected_rows: list[int] = field(default_factory=list)


class RecordMapper:
    """
    Convertit un en-tete et des lignes de donnees en entites.

    Sans etat entre deux appels : une instance peut etre partagee.

    Example:
        mapper = RecordMapper()
        result = mapper.map_all(
            MediaType.BOOKS,
            ["Title", "Author"],
            [["Dune", "Herbert|Anderson"]],
        )
        result.entities[0].authors  # ["Herbert", "Anderson"]
    """

    def __init__(
        self,
        registry: Optional[ConverterRegistry] = None,
        policy: MalformedCellPolicy = MalformedCellPolicy.DEFAULT,
    ) -> None:
        """
        Initialise le mapper.

        Args:
            registry: Registre des convertisseurs (registre par defaut si None)
            policy: Traitement des cellules mal formees
        """
        self._registry = registry or ConverterRegistry()
        self._policy = MalformedCellPolicy(policy)

    @property
    def policy(self) -> MalformedCellPolicy:
        """Politique appliquee aux cellules mal formees."""
        return self._policy

    def map_all(
        self,
        media_type: MediaType,
        header_row: Sequence[str],
        data_rows: Sequence[Sequence[str]],
    ) -> MappingResult:
        """
        Mappe toutes les lignes de donnees vers des entites de la categorie.

        Args:
            media_type: Categorie des entites a produire
            header_row: Cellules de l'en-tete
            data_rows: Lignes de donnees (cellules brutes)

        Returns:
            MappingResult avec les entites dans l'ordre d'entree

        Raises:
            UnknownMediaTypeError: Si aucune variante n'est enregistree pour la categorie
        """
        entity_cls = entity_class_for(media_type)
        bindings = bind_columns(schema_for(media_type), header_row)
        result = MappingResult()

        for row_number, row in enumerate(data_rows, start=1):
            entity = entity_cls()
            row_warnings: list[MappingWarning] = []

            for spec, index in bindings:
                # Ligne plus courte que l'en-tete : colonne absente
                if index >= len(row):
                    continue
                raw = row[index]
                try:
                    value = self._registry.convert(spec.kind, raw)
                except ConversionError as e:
                    row_warnings.append(
                        MappingWarning(row_number, spec.name, raw, e.reason)
                    )
                    continue
                if value is not None:
                    setattr(entity, spec.attr, value)

            result.warnings.extend(row_warnings)
            if row_warnings and self._policy == MalformedCellPolicy.REJECT_ROW:
                result.rejected_rows.append(row_number)
                logger.debug(
                    f"Ligne {row_number} rejetee: "
                    f"{', '.join(w.field for w in row_warnings)}"
                )
                continue
            result.entities.append(entity)

        if result.warnings:
            logger.warning(
                f"{media_type.label}: {len(result.warnings)} cellule(s) mal formee(s), "
                f"{len(result.rejected_rows)} ligne(s) rejetee(s)"
            )
        logger.debug(
            f"Mapping {media_type.label}: {len(data_rows)} ligne(s), "
            f"{len(result.entities)} entite(s)"
        )
        return result
