"""
Fixtures pytest partagees pour les tests MediaSet.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks des interfaces (IEntityRepository, IImageService, APICache)
- Settings de test avec chemins temporaires
- Session SQLite en memoire
"""

from pathlib import Path
from typing import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlmodel import Session

from mediaset.adapters.api.cache import APICache
from mediaset.config import Settings
from mediaset.core.entities.media import CoverImage
from mediaset.core.ports.images import IImageService
from mediaset.core.ports.repositories import IEntityRepository
from mediaset.infrastructure.persistence.database import build_engine, init_db


@pytest.fixture
def mock_repository() -> MagicMock:
    """
    Mock de IEntityRepository pour les tests.

    save et bulk_create renvoient les entites recues.
    Les valeurs de list_missing_images doivent etre configurees dans chaque test.
    """
    mock = MagicMock(spec=IEntityRepository)
    mock.save.side_effect = lambda entity: entity
    mock.bulk_create.side_effect = lambda entities: list(entities)
    mock.list_missing_images.return_value = []
    mock.list_all.return_value = []
    mock.get_by_id.return_value = None
    return mock


@pytest.fixture
def mock_image_service() -> MagicMock:
    """Mock de IImageService : download_and_save renvoie une CoverImage."""
    mock = MagicMock(spec=IImageService)
    mock.download_and_save = AsyncMock(
        return_value=CoverImage(
            file_name="1-cover.jpg",
            file_path="books/1-cover.jpg",
            content_type="image/jpeg",
            file_size=1024,
            source_url="https://example.com/cover.jpg",
        )
    )
    return mock


@pytest.fixture
def mock_cache() -> AsyncMock:
    """
    Mock de APICache (cache miss par defaut).

    get_or_fetch appelle directement la fonction de recuperation.
    """
    cache = AsyncMock(spec=APICache)
    cache.get.return_value = None

    async def passthrough(key, ttl, fetch):
        return await fetch()

    cache.get_or_fetch.side_effect = passthrough
    return cache


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler base, images, cache et logs.
    """
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        image_storage_dir=tmp_path / "images",
        cache_dir=tmp_path / "cache",
        log_file=tmp_path / "logs" / "test.log",
    )


@pytest.fixture
def session() -> Iterator[Session]:
    """Session SQLModel sur une base SQLite en memoire."""
    engine = build_engine("sqlite:///:memory:")
    init_db(engine)
    with Session(engine) as db_session:
        yield db_session
    engine.dispose()
