"""
Interfaces ports pour le téléchargement et le stockage des images.

- IImageStorage : écriture des fichiers image sous une racine de stockage
- IImageService : téléchargement, validation et enregistrement d'une couverture
"""

from abc import ABC, abstractmethod

from mediaset.core.entities.media import CoverImage
from mediaset.core.value_objects.media_type import MediaType


class ImageDownloadError(Exception):
    """Levée quand une image ne peut pas être téléchargée ou enregistrée.

    Attributs :
        url : URL de l'image
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(reason)


class IImageStorage(ABC):
    """Interface de stockage des fichiers image."""

    @abstractmethod
    def save(self, relative_path: str, content: bytes) -> None:
        """Écrit le contenu sous le chemin relatif donné."""
        ...

    @abstractmethod
    def delete(self, relative_path: str) -> bool:
        """Supprime un fichier. Retourne True si supprimé."""
        ...

    @abstractmethod
    def exists(self, relative_path: str) -> bool:
        """Vérifie l'existence d'un fichier."""
        ...


class IImageService(ABC):
    """Interface de récupération des images de couverture."""

    @abstractmethod
    async def download_and_save(
        self, url: str, media_type: MediaType, entity_id: str
    ) -> CoverImage:
        """
        Télécharge une image et l'enregistre pour une entité.

        Args :
            url : URL http(s) de l'image
            media_type : Catégorie de l'entité (sous-répertoire de stockage)
            entity_id : ID de l'entité (préfixe du nom de fichier)

        Retourne :
            La CoverImage décrivant le fichier enregistré

        Lève :
            ImageDownloadError : URL invalide, réponse en erreur, format ou taille refusés
        """
        ...
