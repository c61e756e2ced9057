"""
Objet valeur pour la categorie d'un media du catalogue.

Les valeurs numeriques sont stables : elles sont exposees dans les routes
(``/metadata/2/genres`` equivaut a ``/metadata/movies/genres``) et stockees
en base.
"""

from enum import IntEnum


class MediaType(IntEnum):
    """Categorie d'une entite du catalogue.

    Valeurs:
        BOOKS: Livres (identifiant de recherche : ISBN)
        MOVIES: Films et series TV (identifiant : code-barres UPC/EAN)
        GAMES: Jeux video (identifiant : code-barres UPC/EAN)
        MUSICS: Albums musicaux (identifiant : code-barres UPC/EAN)
    """

    BOOKS = 1
    MOVIES = 2
    GAMES = 3
    MUSICS = 4

    @property
    def label(self) -> str:
        """Nom affiche dans les messages (ex: "Books")."""
        return self.name.capitalize()

    @property
    def slug(self) -> str:
        """Nom en minuscules utilise pour les chemins de fichiers (ex: "books")."""
        return self.name.lower()

    @classmethod
    def valid_types(cls) -> str:
        """Liste des categories valides, pour les messages d'erreur."""
        return ", ".join(member.label for member in cls)
