"""
Service d'import des exports tabulaires.

UploadService enchaine le parsing du fichier, le mapping des lignes vers des
entites et l'insertion en lot via le repository. Les lignes vides sont
ignorees et les cellules mal formees sont remontees dans le rapport, sans
interrompre l'import.
"""

from dataclasses import dataclass, field
from typing import Any, Sequence

from loguru import logger

from mediaset.core.entities.media import Entity
from mediaset.core.ports.repositories import IEntityRepository
from mediaset.core.value_objects.media_type import MediaType
from mediaset.services.upload.mapper import MappingWarning, RecordMapper


class UploadFormatError(ValueError):
    """Levee quand le contenu importe n'a pas de donnees exploitables."""


@dataclass
class UploadReport:
    """Resultat d'un import.

    Attributes:
        media_type: Categorie importee
        created: Entites creees (avec leur ID)
        skipped_empty: Nombre de lignes ignorees car vides
        rejected_rows: Numeros des lignes rejetees (cellules mal formees)
        warnings: Cellules mal formees
    """

    media_type: MediaType
    created: list[Entity] = field(default_factory=list)
    skipped_empty: int = 0
    rejected_rows: list[int] = field(default_factory=list)
    warnings: list[MappingWarning] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        """Nombre d'entites creees."""
        return len(self.created)


class UploadService:
    """
    Service d'import des fichiers tabulaires.

    Example:
        service = UploadService(repository=repo, mapper=RecordMapper(), parser=parser)
        report = service.upload_content(MediaType.BOOKS, content)
        print(f"Crees: {report.created_count}, ignores: {report.skipped_empty}")
    """

    def __init__(
        self,
        repository: IEntityRepository,
        mapper: RecordMapper,
        parser: Any,
    ) -> None:
        """
        Initialise le service d'import.

        Args:
            repository: Repository des entites
            mapper: Mapper lignes -> entites
            parser: Parser du contenu importe (DelimitedFileParser)
        """
        self._repository = repository
        self._mapper = mapper
        self._parser = parser

    def upload_content(self, media_type: MediaType, content: str) -> UploadReport:
        """
        Importe le contenu texte d'un fichier.

        Raises:
            UploadFormatError: Si le contenu est vide ou sans ligne de donnees
        """
        header_row, data_rows = self._parser.parse(content)
        return self.upload(media_type, header_row, data_rows)

    def upload(
        self,
        media_type: MediaType,
        header_row: Sequence[str],
        data_rows: Sequence[Sequence[str]],
    ) -> UploadReport:
        """
        Mappe et insere un lot de lignes.

        Args:
            media_type: Categorie des entites
            header_row: Cellules de l'en-tete
            data_rows: Lignes de donnees

        Returns:
            UploadReport decrivant l'import

        Raises:
            UploadFormatError: Si aucune ligne de donnees n'est fournie
        """
        if not header_row or not data_rows:
            raise UploadFormatError("No data to upload.")

        mapping = self._mapper.map_all(media_type, header_row, data_rows)
        entities = [entity for entity in mapping.entities if not entity.is_empty()]

        report = UploadReport(
            media_type=media_type,
            skipped_empty=len(mapping.entities) - len(entities),
            rejected_rows=mapping.rejected_rows,
            warnings=mapping.warnings,
        )
        if entities:
            report.created = self._repository.bulk_create(entities)

        logger.info(
            f"Import {media_type.label}: {report.created_count} cree(s), "
            f"{report.skipped_empty} vide(s), {len(report.rejected_rows)} rejete(s)"
        )
        return report
