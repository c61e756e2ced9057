"""
Implementations SQLModel des repositories.
"""

from mediaset.infrastructure.persistence.repositories.entity_repository import (
    SQLModelEntityRepository,
)

__all__ = ["SQLModelEntityRepository"]
