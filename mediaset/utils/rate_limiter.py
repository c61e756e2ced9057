"""
Limiteur de debit asynchrone partage entre coroutines.

Garantit un intervalle minimal entre deux acquisitions, quel que soit le
nombre de workers qui partagent l'instance. Utilise par MusicBrainzClient
(1 requete par seconde) et par l'enrichissement en arriere-plan
(requetes par minute configurables).
"""

import asyncio
import time
from typing import Awaitable, Callable


class AsyncRateLimiter:
    """
    Espace les acquisitions d'au moins min_interval secondes.

    Example:
        limiter = AsyncRateLimiter.per_minute(30)
        async def worker():
            await limiter.acquire()
            await call_api()
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialise le limiteur.

        Args:
            min_interval: Intervalle minimal entre deux acquisitions (secondes)
            clock: Horloge monotone (injectable pour les tests)
            sleep: Fonction d'attente (injectable pour les tests)
        """
        if min_interval < 0:
            raise ValueError("min_interval doit etre positif")
        self._min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._next_allowed = 0.0

    @classmethod
    def per_minute(cls, requests_per_minute: int, **kwargs) -> "AsyncRateLimiter":
        """Construit un limiteur a partir d'un nombre de requetes par minute."""
        if requests_per_minute <= 0:
            raise ValueError("requests_per_minute doit etre strictement positif")
        return cls(60.0 / requests_per_minute, **kwargs)

    @property
    def min_interval(self) -> float:
        """Intervalle minimal entre deux acquisitions, en secondes."""
        return self._min_interval

    async def acquire(self) -> None:
        """Attend le prochain creneau disponible."""
        async with self._lock:
            now = self._clock()
            delay = self._next_allowed - now
            if delay > 0:
                await self._sleep(delay)
                now = self._clock()
            self._next_allowed = now + self._min_interval
