"""
Enrichissement periodique des images de couverture en arriere-plan.

A chaque passe, les categories couvertes par une strategie de recherche se
partagent le lot configure. Les entites eligibles (sans image et sans echec
permanent) sont traitees par un pool borne de workers asyncio, sous une
limite de debit commune et une duree maximale. Chaque resultat est
sauvegarde des qu'il est connu.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from loguru import logger

from mediaset.core.entities.media import Entity, ImageLookup, utcnow
from mediaset.core.ports.repositories import IEntityRepository
from mediaset.core.value_objects.media_type import MediaType
from mediaset.services.image_lookup import ImageLookupService
from mediaset.services.lookup.factory import LookupStrategyFactory
from mediaset.utils.rate_limiter import AsyncRateLimiter

# Pause apres une erreur de la boucle principale (secondes)
ERROR_RETRY_DELAY = 60.0


@dataclass
class LookupRunStats:
    """Statistiques d'une passe d'enrichissement."""

    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    permanent_failures: int = 0
    errors: int = 0
    media_types: list[MediaType] = field(default_factory=list)
    timed_out: bool = False


def split_batch(batch_size: int, media_types: list[MediaType]) -> dict[MediaType, int]:
    """
    Repartit le lot entre les categories.

    Chaque categorie recoit au moins une place ; le reste de la division
    va aux premieres categories.

    Example:
        split_batch(10, [BOOKS, MOVIES, GAMES])  # {BOOKS: 4, MOVIES: 3, GAMES: 3}
    """
    if not media_types:
        return {}
    per_type = max(1, batch_size // len(media_types))
    remainder = batch_size % len(media_types) if batch_size >= len(media_types) else 0
    limits = {}
    for index, media_type in enumerate(media_types):
        limits[media_type] = per_type + (1 if index < remainder else 0)
    return limits


class BackgroundImageLookupService:
    """
    Service d'enrichissement en arriere-plan.

    Example:
        service = container.background_image_lookup_service()
        stop = asyncio.Event()
        await service.run_forever(stop)
    """

    def __init__(
        self,
        repository: IEntityRepository,
        lookup_service: ImageLookupService,
        strategy_factory: LookupStrategyFactory,
        batch_size: int = 25,
        workers: int = 2,
        requests_per_minute: int = 30,
        max_runtime_minutes: float = 60,
        interval_hours: float = 24,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialise le service.

        Args:
            repository: Repository des entites
            lookup_service: Orchestrateur d'enrichissement d'une entite
            strategy_factory: Strategies disponibles (determine les categories traitees)
            batch_size: Nombre maximal d'entites par passe, toutes categories confondues
            workers: Nombre de workers concurrents
            requests_per_minute: Debit maximal d'entites traitees
            max_runtime_minutes: Duree maximale d'une passe
            interval_hours: Intervalle entre deux passes de run_forever
            clock: Horloge monotone (injectable pour les tests)
        """
        if workers < 1:
            raise ValueError("workers doit etre >= 1")
        self._repository = repository
        self._lookup_service = lookup_service
        self._strategy_factory = strategy_factory
        self._batch_size = batch_size
        self._workers = workers
        self._rate_limiter = AsyncRateLimiter.per_minute(requests_per_minute)
        self._max_runtime = max_runtime_minutes * 60
        self._interval = interval_hours * 3600
        self._clock = clock

    def available_media_types(self) -> list[MediaType]:
        """Categories couvertes par au moins une strategie."""
        return [
            media_type for media_type in MediaType if self._strategy_factory.supports(media_type)
        ]

    async def run_once(self) -> LookupRunStats:
        """
        Execute une passe d'enrichissement.

        Returns:
            Statistiques de la passe
        """
        stats = LookupRunStats(media_types=self.available_media_types())
        if not stats.media_types:
            logger.warning("Aucune strategie de recherche disponible, passe ignoree")
            return stats

        deadline = self._clock() + self._max_runtime
        limits = split_batch(self._batch_size, stats.media_types)
        logger.info(
            f"Debut de l'enrichissement: lot {self._batch_size}, "
            f"{self._workers} workers, categories {[m.label for m in stats.media_types]}"
        )

        queue: asyncio.Queue[Entity] = asyncio.Queue()
        for media_type, limit in limits.items():
            entities = self._repository.list_missing_images(media_type, limit)
            logger.info(f"{len(entities)} {media_type.label} sans image (limite {limit})")
            for entity in entities:
                queue.put_nowait(entity)

        started = self._clock()
        workers = [
            asyncio.create_task(self._worker(queue, stats, deadline))
            for _ in range(self._workers)
        ]
        try:
            await asyncio.gather(*workers)
        finally:
            for task in workers:
                task.cancel()

        logger.info(
            f"Enrichissement termine: {stats.processed} traitees, "
            f"{stats.succeeded} reussies, {stats.failed} echecs "
            f"({stats.permanent_failures} permanents, {stats.errors} erreurs) "
            f"en {self._clock() - started:.1f}s"
        )
        return stats

    async def _worker(
        self, queue: "asyncio.Queue[Entity]", stats: LookupRunStats, deadline: float
    ) -> None:
        while True:
            try:
                entity = queue.get_nowait()
            except asyncio.QueueEmpty:
                return

            if self._clock() >= deadline:
                if not stats.timed_out:
                    logger.info("Duree maximale atteinte, arret de la passe")
                stats.timed_out = True
                return

            await self._rate_limiter.acquire()
            await self._process(entity, stats)

    async def _process(self, entity: Entity, stats: LookupRunStats) -> None:
        stats.processed += 1
        try:
            result = await self._lookup_service.lookup_and_save_image(entity)
            self._repository.save(entity)
        except Exception as e:
            stats.failed += 1
            stats.errors += 1
            logger.error(f"Erreur sur {entity.media_type.label} {entity.id}: {e}")
            self._record_error(entity, e)
            return

        if result.success:
            stats.succeeded += 1
        else:
            stats.failed += 1
            if result.permanent_failure:
                stats.permanent_failures += 1

    async def run_forever(self, stop_event: asyncio.Event) -> None:
        """
        Execute une passe toutes les interval_hours jusqu'a l'arret.

        Une erreur de passe est journalisee et la boucle reprend apres une
        minute.
        """
        logger.info(f"Enrichissement en arriere-plan demarre (toutes les {self._interval / 3600:g}h)")
        delay = self._interval
        while not await self._wait(stop_event, delay):
            try:
                await self.run_once()
                delay = self._interval
            except Exception as e:
                logger.error(f"Erreur de la boucle d'enrichissement: {e}")
                delay = ERROR_RETRY_DELAY
        logger.info("Enrichissement en arriere-plan arrete")

    @staticmethod
    async def _wait(stop_event: asyncio.Event, seconds: float) -> bool:
        """Attend seconds ou l'arret. Retourne True si l'arret est demande."""
        if stop_event.is_set():
            return True
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True

    def _record_error(self, entity: Entity, error: Exception) -> None:
        """Marque la tentative en echec relancable pour ne pas repasser l'entite en tete de file."""
        entity.image_lookup = ImageLookup(attempted_at=utcnow(), failure_reason=str(error))
        try:
            self._repository.save(entity)
        except Exception as e:
            logger.error(f"Sauvegarde impossible pour {entity.media_type.label} {entity.id}: {e}")
