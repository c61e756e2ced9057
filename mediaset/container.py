"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour les interfaces CLI et Web :
clients API, strategies de recherche, stockage des images, repository SQLModel
et services applicatifs.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.giantbomb_client import GiantBombClient
from .adapters.api.musicbrainz_client import MusicBrainzClient
from .adapters.api.openlibrary_client import OpenLibraryClient
from .adapters.api.tmdb_client import TMDBClient
from .adapters.api.upcitemdb_client import UpcItemDbClient
from .adapters.storage.image_service import ImageService
from .adapters.storage.local_storage import LocalImageStorage
from .adapters.upload.delimited_parser import DelimitedFileParser
from .config import Settings
from .core.ports.lookup import ILookupStrategy
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import SQLModelEntityRepository
from .services.background_image_lookup import BackgroundImageLookupService
from .services.image_lookup import ImageLookupService
from .services.lookup import (
    BookLookupStrategy,
    GameLookupStrategy,
    LookupStrategyFactory,
    MovieLookupStrategy,
    MusicLookupStrategy,
)
from .services.metadata import MetadataService
from .services.upload.converters import ConverterRegistry
from .services.upload.mapper import RecordMapper
from .services.upload.service import UploadService


def build_lookup_strategies(
    settings: Settings,
    barcode_client: UpcItemDbClient,
    book_client: OpenLibraryClient,
    tmdb_client: TMDBClient,
    giantbomb_client: GiantBombClient,
    music_client: MusicBrainzClient,
) -> list[ILookupStrategy]:
    """
    Construit les strategies dont l'API est configuree.

    Une categorie sans strategie est consideree comme non supportee.
    """
    strategies: list[ILookupStrategy] = []
    if settings.openlibrary_enabled:
        strategies.append(BookLookupStrategy(book_client, barcode_client))
    if settings.tmdb_enabled:
        strategies.append(MovieLookupStrategy(barcode_client, tmdb_client))
    if settings.giantbomb_enabled:
        strategies.append(GameLookupStrategy(barcode_client, giantbomb_client))
    if settings.musicbrainz_enabled:
        strategies.append(MusicLookupStrategy(music_client))
    return strategies


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        service = container.upload_service()
        report = service.upload_content(MediaType.BOOKS, content)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Repository - Factory pour une session fraiche
    entity_repository = providers.Factory(
        SQLModelEntityRepository,
        session=session,
    )

    # Cache API - Singleton pour partage entre clients
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Clients API - Singleton, un client HTTP par API
    upcitemdb_client = providers.Singleton(
        UpcItemDbClient,
        cache=api_cache,
        api_key=config.provided.upcitemdb_api_key,
    )
    openlibrary_client = providers.Singleton(OpenLibraryClient, cache=api_cache)
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        language=config.provided.tmdb_language,
    )
    giantbomb_client = providers.Singleton(
        GiantBombClient,
        api_key=config.provided.giantbomb_api_key,
        cache=api_cache,
    )
    musicbrainz_client = providers.Singleton(MusicBrainzClient, cache=api_cache)

    # Strategies de recherche
    lookup_strategies = providers.Singleton(
        build_lookup_strategies,
        settings=config,
        barcode_client=upcitemdb_client,
        book_client=openlibrary_client,
        tmdb_client=tmdb_client,
        giantbomb_client=giantbomb_client,
        music_client=musicbrainz_client,
    )
    strategy_factory = providers.Singleton(
        LookupStrategyFactory,
        strategies=lookup_strategies,
    )

    # Images
    image_storage = providers.Singleton(
        LocalImageStorage,
        root=config.provided.image_storage_dir,
    )
    image_service = providers.Singleton(
        ImageService,
        storage=image_storage,
        allowed_extensions=config.provided.image_allowed_extensions,
        max_size=config.provided.image_max_size,
        timeout=config.provided.image_download_timeout,
    )
    image_lookup_service = providers.Singleton(
        ImageLookupService,
        strategy_factory=strategy_factory,
        image_service=image_service,
    )

    # Import tabulaire (stateless - Singletons)
    converter_registry = providers.Singleton(ConverterRegistry)
    record_mapper = providers.Singleton(
        RecordMapper,
        registry=converter_registry,
        policy=config.provided.upload_malformed_cell_policy,
    )
    file_parser = providers.Singleton(
        DelimitedFileParser,
        delimiter=config.provided.upload_delimiter,
    )

    # Services - Factory car dependent du repository (session fraiche)
    upload_service = providers.Factory(
        UploadService,
        repository=entity_repository,
        mapper=record_mapper,
        parser=file_parser,
    )
    metadata_service = providers.Factory(
        MetadataService,
        repository=entity_repository,
    )
    background_image_lookup_service = providers.Factory(
        BackgroundImageLookupService,
        repository=entity_repository,
        lookup_service=image_lookup_service,
        strategy_factory=strategy_factory,
        batch_size=config.provided.background_batch_size,
        workers=config.provided.background_workers,
        requests_per_minute=config.provided.background_requests_per_minute,
        max_runtime_minutes=config.provided.background_max_runtime_minutes,
        interval_hours=config.provided.background_interval_hours,
    )
