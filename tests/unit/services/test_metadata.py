"""
Tests unitaires pour MetadataService.
"""

from unittest.mock import MagicMock

import pytest

from mediaset.core.entities.media import Book, Movie
from mediaset.core.value_objects import MediaType
from mediaset.services.metadata import MetadataService


class TestGetValues:
    """Tests pour MetadataService.get_values."""

    def test_text_field_values_are_deduplicated_and_sorted(self, mock_repository: MagicMock) -> None:
        mock_repository.list_all.return_value = [
            Movie(format="Blu-ray"),
            Movie(format="dvd"),
            Movie(format="blu-ray"),
            Movie(format=" DVD "),
            Movie(format=""),
        ]
        service = MetadataService(mock_repository)

        values = service.get_values(MediaType.MOVIES, "format")

        assert values == ["Blu-ray", "dvd"]
        mock_repository.list_all.assert_called_once_with(MediaType.MOVIES)

    def test_list_field_values_are_flattened(self, mock_repository: MagicMock) -> None:
        mock_repository.list_all.return_value = [
            Book(genres=["Science Fiction", "Classic"]),
            Book(genres=["classic", "Fantasy"]),
            Book(),
        ]

        values = MetadataService(mock_repository).get_values(MediaType.BOOKS, "Genre")

        assert values == ["Classic", "Fantasy", "Science Fiction"]

    def test_unknown_property_raises(self, mock_repository: MagicMock) -> None:
        with pytest.raises(ValueError, match="Unknown property 'shelf' for Books"):
            MetadataService(mock_repository).get_values(MediaType.BOOKS, "shelf")

    def test_numeric_property_is_not_enumerable(self, mock_repository: MagicMock) -> None:
        with pytest.raises(ValueError):
            MetadataService(mock_repository).get_values(MediaType.BOOKS, "pages")
