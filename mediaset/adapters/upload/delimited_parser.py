"""
Parser pour les exports de tableur delimites (CSV a point-virgule).

Les exports du catalogue utilisent ";" comme separateur et des guillemets
pour les cellules contenant le separateur ou des retours a la ligne. La
premiere ligne non vide est l'en-tete.

Le parser ne connait pas le schema des entites : il renvoie des cellules
brutes, converties ensuite par le RecordMapper.
"""

import csv
import io
from pathlib import Path

from mediaset.services.upload.service import UploadFormatError

_BOM = "\ufeff"


def _is_blank(row: list[str]) -> bool:
    return not any(cell.strip() for cell in row)


class DelimitedFileParser:
    """
    Parser des fichiers tabulaires delimites.

    Example:
        parser = DelimitedFileParser(delimiter=";")
        header, rows = parser.parse('Title;Author\\n"Dune";Herbert')
        # header == ["Title", "Author"], rows == [["Dune", "Herbert"]]
    """

    def __init__(self, delimiter: str = ";", quotechar: str = '"') -> None:
        """
        Initialise le parser.

        Args:
            delimiter: Separateur de cellules (defaut: ";")
            quotechar: Caractere de citation (defaut: '"')
        """
        self._delimiter = delimiter
        self._quotechar = quotechar

    def parse(self, content: str) -> tuple[list[str], list[list[str]]]:
        """
        Parse le contenu d'un fichier.

        Les lignes vides avant l'en-tete et en fin de fichier sont ignorees.
        Les lignes vides intermediaires sont conservees pour que la position
        d'une ligne de donnees corresponde a celle du fichier.

        Args:
            content: Contenu texte du fichier

        Returns:
            Tuple (en-tete, lignes de donnees)

        Raises:
            UploadFormatError: Si le contenu ne contient aucune ligne d'en-tete
        """
        if content.startswith(_BOM):
            content = content[len(_BOM):]

        reader = csv.reader(
            io.StringIO(content, newline=""),
            delimiter=self._delimiter,
            quotechar=self._quotechar,
        )
        try:
            rows = list(reader)
        except csv.Error as e:
            raise UploadFormatError(f"Malformed delimited data: {e}") from e

        while rows and _is_blank(rows[0]):
            rows.pop(0)
        while rows and _is_blank(rows[-1]):
            rows.pop()
        if not rows:
            raise UploadFormatError("No data to upload.")

        header, data_rows = rows[0], rows[1:]
        return [cell.strip() for cell in header], data_rows

    def parse_file(self, file_path: Path) -> tuple[list[str], list[list[str]]]:
        """
        Parse un fichier sur disque (UTF-8, BOM accepte).

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            UploadFormatError: Si le fichier est vide
        """
        if not file_path.exists():
            raise FileNotFoundError(f"Fichier non trouve: {file_path}")
        return self.parse(file_path.read_text(encoding="utf-8-sig"))
