"""
Tests unitaires pour BackgroundImageLookupService.

Le debit est configure tres haut pour que le limiteur n'attende pas.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from mediaset.core.entities.media import Book, LookupState, Movie, lookup_state
from mediaset.core.value_objects import MediaType
from mediaset.services.background_image_lookup import (
    BackgroundImageLookupService,
    split_batch,
)
from mediaset.services.image_lookup import ImageLookupResult, ImageLookupService
from mediaset.services.lookup.factory import LookupStrategyFactory

FAST_RATE = 600_000


@pytest.fixture
def strategy_factory() -> MagicMock:
    factory = MagicMock(spec=LookupStrategyFactory)
    factory.supports.side_effect = lambda media_type: media_type in (
        MediaType.BOOKS,
        MediaType.MOVIES,
    )
    return factory


@pytest.fixture
def lookup_service() -> MagicMock:
    service = MagicMock(spec=ImageLookupService)
    service.lookup_and_save_image = AsyncMock(return_value=ImageLookupResult(success=True))
    return service


def _service(repository, lookup_service, strategy_factory, **kwargs) -> BackgroundImageLookupService:
    kwargs.setdefault("requests_per_minute", FAST_RATE)
    return BackgroundImageLookupService(repository, lookup_service, strategy_factory, **kwargs)


class TestSplitBatch:
    """Tests pour split_batch."""

    def test_remainder_goes_to_first_types(self) -> None:
        types = [MediaType.BOOKS, MediaType.MOVIES, MediaType.GAMES]
        assert split_batch(10, types) == {
            MediaType.BOOKS: 4,
            MediaType.MOVIES: 3,
            MediaType.GAMES: 3,
        }

    def test_each_type_gets_at_least_one(self) -> None:
        types = list(MediaType)
        assert split_batch(2, types) == {media_type: 1 for media_type in types}

    def test_no_types(self) -> None:
        assert split_batch(10, []) == {}


class TestRunOnce:
    """Tests pour run_once."""

    @pytest.mark.asyncio
    async def test_processes_eligible_entities_per_media_type(
        self, mock_repository, lookup_service, strategy_factory
    ) -> None:
        books = [Book(id=str(i), isbn=f"97800000000{i}") for i in range(3)]
        movies = [Movie(id="10", barcode="883929247318")]
        mock_repository.list_missing_images.side_effect = lambda media_type, limit: {
            MediaType.BOOKS: books,
            MediaType.MOVIES: movies,
        }[media_type]
        service = _service(mock_repository, lookup_service, strategy_factory, batch_size=10)

        stats = await service.run_once()

        assert stats.media_types == [MediaType.BOOKS, MediaType.MOVIES]
        mock_repository.list_missing_images.assert_any_call(MediaType.BOOKS, 5)
        mock_repository.list_missing_images.assert_any_call(MediaType.MOVIES, 5)
        assert stats.processed == 4
        assert stats.succeeded == 4
        assert mock_repository.save.call_count == 4

    @pytest.mark.asyncio
    async def test_counts_failures(self, mock_repository, lookup_service, strategy_factory) -> None:
        mock_repository.list_missing_images.side_effect = lambda media_type, limit: (
            [Book(id="1"), Book(id="2", isbn="1"), Book(id="3", isbn="2")]
            if media_type == MediaType.BOOKS
            else []
        )
        lookup_service.lookup_and_save_image.side_effect = [
            ImageLookupResult(success=False, permanent_failure=True),
            ImageLookupResult(success=False, error_message="No match found for identifier"),
            RuntimeError("database locked"),
        ]
        service = _service(mock_repository, lookup_service, strategy_factory, workers=1)

        stats = await service.run_once()

        assert stats.processed == 3
        assert stats.failed == 3
        assert stats.permanent_failures == 1
        assert stats.errors == 1
        assert mock_repository.save.call_count == 3

    @pytest.mark.asyncio
    async def test_unexpected_error_is_recorded_as_retryable(
        self, mock_repository, lookup_service, strategy_factory
    ) -> None:
        """Une erreur inattendue est enregistree : l'entite ne reste pas jamais tentee."""
        book = Book(id="1", isbn="9780441172719")
        mock_repository.list_missing_images.side_effect = lambda media_type, limit: (
            [book] if media_type == MediaType.BOOKS else []
        )
        lookup_service.lookup_and_save_image.side_effect = RuntimeError("decoder crashed")
        service = _service(mock_repository, lookup_service, strategy_factory)

        stats = await service.run_once()

        assert stats.errors == 1
        mock_repository.save.assert_called_once_with(book)
        assert book.image_lookup is not None
        assert book.image_lookup.attempted_at is not None
        assert book.image_lookup.failure_reason == "decoder crashed"
        assert not book.image_lookup.permanent_failure
        assert lookup_state(book) == LookupState.FAILED_RETRYABLE

    @pytest.mark.asyncio
    async def test_cancellation_is_not_recorded(
        self, mock_repository, lookup_service, strategy_factory
    ) -> None:
        book = Book(id="1", isbn="9780441172719")
        mock_repository.list_missing_images.side_effect = lambda media_type, limit: (
            [book] if media_type == MediaType.BOOKS else []
        )
        lookup_service.lookup_and_save_image.side_effect = asyncio.CancelledError()
        service = _service(mock_repository, lookup_service, strategy_factory)

        with pytest.raises(asyncio.CancelledError):
            await service.run_once()

        mock_repository.save.assert_not_called()
        assert book.image_lookup is None

    @pytest.mark.asyncio
    async def test_no_strategy_skips_run(self, mock_repository, lookup_service) -> None:
        factory = MagicMock(spec=LookupStrategyFactory)
        factory.supports.return_value = False
        service = _service(mock_repository, lookup_service, factory)

        stats = await service.run_once()

        assert stats.media_types == []
        mock_repository.list_missing_images.assert_not_called()

    @pytest.mark.asyncio
    async def test_stops_after_max_runtime(
        self, mock_repository, lookup_service, strategy_factory
    ) -> None:
        """Au-dela de la duree maximale, les entites restantes sont laissees."""
        now = [0.0]

        async def slow_lookup(entity):
            now[0] += 120.0
            return ImageLookupResult(success=True)

        lookup_service.lookup_and_save_image.side_effect = slow_lookup
        mock_repository.list_missing_images.side_effect = lambda media_type, limit: (
            [Book(id=str(i), isbn=str(i)) for i in range(5)] if media_type == MediaType.BOOKS else []
        )
        service = _service(
            mock_repository,
            lookup_service,
            strategy_factory,
            workers=1,
            max_runtime_minutes=3,
            clock=lambda: now[0],
        )

        stats = await service.run_once()

        assert stats.processed == 2
        assert stats.timed_out

    def test_workers_must_be_positive(self, mock_repository, lookup_service, strategy_factory) -> None:
        with pytest.raises(ValueError):
            _service(mock_repository, lookup_service, strategy_factory, workers=0)


class TestRunForever:
    """Tests pour run_forever."""

    @pytest.mark.asyncio
    async def test_returns_immediately_when_stopped(
        self, mock_repository, lookup_service, strategy_factory
    ) -> None:
        service = _service(mock_repository, lookup_service, strategy_factory)
        service.run_once = AsyncMock()
        stop = asyncio.Event()
        stop.set()

        await service.run_forever(stop)

        service.run_once.assert_not_called()

    @pytest.mark.asyncio
    async def test_runs_after_each_interval(
        self, mock_repository, lookup_service, strategy_factory
    ) -> None:
        service = _service(
            mock_repository, lookup_service, strategy_factory, interval_hours=0.000001
        )
        stop = asyncio.Event()
        calls = []

        async def run_once():
            calls.append(1)
            if len(calls) == 2:
                stop.set()

        service.run_once = run_once

        await asyncio.wait_for(service.run_forever(stop), timeout=5)

        assert len(calls) == 2
