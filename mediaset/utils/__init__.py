"""
Utilitaires partages pour MediaSet.

Ce module contient le nettoyage des intitules commerciaux et le limiteur
de debit asynchrone.
"""

from mediaset.utils.rate_limiter import AsyncRateLimiter
from mediaset.utils.titles import (
    clean_game_title,
    clean_movie_title,
    extract_game_format,
    extract_movie_format,
    extract_platform,
)

__all__ = [
    "AsyncRateLimiter",
    "clean_game_title",
    "clean_movie_title",
    "extract_game_format",
    "extract_movie_format",
    "extract_platform",
]
