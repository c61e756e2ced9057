"""
Tests unitaires pour LookupStrategyFactory.
"""

from unittest.mock import MagicMock

import pytest

from mediaset.core.ports.api_clients import IBarcodeClient, IBookClient, IMusicClient
from mediaset.core.ports.lookup import UnsupportedLookupError
from mediaset.core.value_objects import IdentifierType, MediaType
from mediaset.services.lookup import (
    BookLookupStrategy,
    LookupStrategyFactory,
    MusicLookupStrategy,
)


@pytest.fixture
def factory() -> LookupStrategyFactory:
    return LookupStrategyFactory(
        [
            BookLookupStrategy(MagicMock(spec=IBookClient), MagicMock(spec=IBarcodeClient)),
            MusicLookupStrategy(MagicMock(spec=IMusicClient)),
        ]
    )


class TestLookupStrategyFactory:
    """Tests pour LookupStrategyFactory."""

    def test_returns_matching_strategy(self, factory: LookupStrategyFactory) -> None:
        strategy = factory.get_strategy(MediaType.BOOKS, IdentifierType.OLID)
        assert isinstance(strategy, BookLookupStrategy)

    def test_unregistered_media_type_raises(self, factory: LookupStrategyFactory) -> None:
        """Sans cle TMDB, aucune strategie film n'est enregistree."""
        with pytest.raises(UnsupportedLookupError) as exc_info:
            factory.get_strategy(MediaType.MOVIES, IdentifierType.UPC)
        assert exc_info.value.media_type == MediaType.MOVIES
        assert "Movies" in str(exc_info.value)

    def test_unsupported_identifier_type_raises(self, factory: LookupStrategyFactory) -> None:
        with pytest.raises(UnsupportedLookupError):
            factory.get_strategy(MediaType.MUSICS, IdentifierType.ISBN)

    def test_supports(self, factory: LookupStrategyFactory) -> None:
        assert factory.supports(MediaType.BOOKS)
        assert factory.supports(MediaType.MUSICS)
        assert not factory.supports(MediaType.GAMES)

    def test_first_registered_strategy_wins(self) -> None:
        first = MusicLookupStrategy(MagicMock(spec=IMusicClient))
        second = MusicLookupStrategy(MagicMock(spec=IMusicClient))
        factory = LookupStrategyFactory([first, second])

        assert factory.get_strategy(MediaType.MUSICS, IdentifierType.EAN) is first
        assert factory.strategies == [first, second]
