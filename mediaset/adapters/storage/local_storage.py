"""
Adaptateur de stockage des images sur le systeme de fichiers local.

Implementation concrete de IImageStorage : les fichiers sont ecrits sous
une racine configuree, a un chemin relatif fourni par l'appelant.
"""

from pathlib import Path

from mediaset.core.ports.images import IImageStorage


class LocalImageStorage(IImageStorage):
    """
    Stockage des images sous un repertoire racine.

    Les chemins relatifs qui sortiraient de la racine ("../") sont refuses.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root).expanduser().resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, relative_path: str) -> Path:
        path = (self._root / relative_path).resolve()
        if path != self._root and self._root not in path.parents:
            raise ValueError(f"Chemin hors du stockage: {relative_path}")
        return path

    def save(self, relative_path: str, content: bytes) -> None:
        """
        Ecrit le contenu sous le chemin relatif.

        Cree les repertoires parents si necessaire.
        """
        path = self._resolve(relative_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    def delete(self, relative_path: str) -> bool:
        """Supprime un fichier."""
        try:
            self._resolve(relative_path).unlink()
            return True
        except OSError:
            return False

    def exists(self, relative_path: str) -> bool:
        """Verifie si un fichier existe."""
        return self._resolve(relative_path).is_file()
