"""
Tests unitaires pour MediaType.

Verifie les valeurs numeriques stables et les libelles exposes par l'API.
"""

from mediaset.core.value_objects import MediaType


class TestMediaType:
    """Tests pour l'enum MediaType."""

    def test_numeric_values_are_stable(self) -> None:
        """Les valeurs numeriques sont exposees dans les routes et en base."""
        assert MediaType.BOOKS == 1
        assert MediaType.MOVIES == 2
        assert MediaType.GAMES == 3
        assert MediaType.MUSICS == 4

    def test_label_is_capitalized_name(self) -> None:
        """label retourne le nom capitalise."""
        assert MediaType.BOOKS.label == "Books"
        assert MediaType.MUSICS.label == "Musics"

    def test_slug_is_lowercase_name(self) -> None:
        """slug sert de sous-repertoire de stockage."""
        assert MediaType.GAMES.slug == "games"

    def test_valid_types_lists_every_label(self) -> None:
        """valid_types alimente les messages d'erreur."""
        assert MediaType.valid_types() == "Books, Movies, Games, Musics"
