"""
Modeles SQLModel pour la base de donnees MediaSet.

Ces modeles representent les tables de la base de donnees SQLite.
Ils sont distincts des entites de domaine (dataclass dans core/entities/)
selon l'architecture hexagonale.

Tables:
- entities: Une ligne par entite du catalogue, toutes categories confondues

Les champs propres a chaque categorie (auteurs, plateforme, pistes...) sont
serialises dans data_json. Les blocs cover_image et image_lookup sont
serialises a part ; quelques colonnes derivees (has_cover,
lookup_attempted_at, lookup_permanent_failure) servent a la selection des
entites a enrichir.
"""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, Index, SQLModel

from mediaset.core.entities.media import utcnow


class EntityModel(SQLModel, table=True):
    """
    Modele representant une entite du catalogue.

    media_type contient la valeur de MediaType (1 = livres, 2 = films...).
    """

    __tablename__ = "entities"
    __table_args__ = (
        Index("ix_entities_enrichment", "media_type", "has_cover", "lookup_permanent_failure"),
    )

    id: int | None = Field(default=None, primary_key=True)
    media_type: int = Field(index=True)
    title: str = Field(default="", index=True)
    format: str = ""
    lookup_identifier: str | None = Field(default=None, index=True)
    image_url: str | None = None
    data_json: str = "{}"  # JSON: champs propres a la categorie
    cover_image_json: str | None = None  # JSON: CoverImage
    image_lookup_json: str | None = None  # JSON: ImageLookup
    has_cover: bool = Field(default=False)
    lookup_attempted_at: datetime | None = Field(default=None)
    lookup_permanent_failure: bool = Field(default=False)
    created_at: datetime | None = Field(default_factory=utcnow)
    updated_at: datetime | None = Field(default_factory=utcnow)
