"""
Implementation SQLModel du repository des entites du catalogue.

Implemente IEntityRepository : une ligne par entite dans la table
entities, avec conversion bidirectionnelle entre les dataclasses du
domaine et EntityModel.
"""

import json
from dataclasses import asdict, fields
from datetime import datetime
from typing import Any, Optional

from sqlmodel import Session, select

from mediaset.core.entities.media import (
    CoverImage,
    Disc,
    Entity,
    ImageLookup,
    Music,
    entity_class_for,
    utcnow,
)
from mediaset.core.ports.repositories import IEntityRepository
from mediaset.core.value_objects.media_type import MediaType
from mediaset.infrastructure.persistence.models import EntityModel

# Champs stockes dans des colonnes dediees, hors data_json
_COMMON_FIELDS = frozenset({"id", "title", "format", "image_url", "cover_image", "image_lookup"})


def _dump_datetimes(data: dict[str, Any]) -> dict[str, Any]:
    return {
        key: value.isoformat() if isinstance(value, datetime) else value
        for key, value in data.items()
    }


def _load_cover_image(raw: Optional[str]) -> Optional[CoverImage]:
    if not raw:
        return None
    data = json.loads(raw)
    for key in ("created_at", "updated_at"):
        if data.get(key):
            data[key] = datetime.fromisoformat(data[key])
    return CoverImage(**data)


def _load_image_lookup(raw: Optional[str]) -> Optional[ImageLookup]:
    if not raw:
        return None
    data = json.loads(raw)
    data["attempted_at"] = datetime.fromisoformat(data["attempted_at"])
    return ImageLookup(**data)


class SQLModelEntityRepository(IEntityRepository):
    """
    Repository SQLModel pour toutes les categories d'entites.

    Le bloc ImageLookup est serialise tel quel : il traverse le stockage
    sans modification entre deux executions de l'enrichissement.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: EntityModel) -> Entity:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele EntityModel depuis la DB

        Retourne :
            L'entite de la categorie du modele (Book, Movie, Game, Music)
        """
        entity_class = entity_class_for(MediaType(model.media_type))
        data = json.loads(model.data_json or "{}")
        known = {entity_field.name for entity_field in fields(entity_class)}
        data = {key: value for key, value in data.items() if key in known}
        if entity_class is Music and "disc_list" in data:
            data["disc_list"] = [Disc(**disc) for disc in data["disc_list"]]

        return entity_class(
            id=str(model.id) if model.id is not None else None,
            title=model.title,
            format=model.format,
            image_url=model.image_url,
            cover_image=_load_cover_image(model.cover_image_json),
            image_lookup=_load_image_lookup(model.image_lookup_json),
            **data,
        )

    def _apply(self, entity: Entity, model: EntityModel) -> EntityModel:
        """
        Recopie l'etat de l'entite dans le modele DB.

        Args :
            entity : L'entite du domaine
            model : Le modele a mettre a jour

        Retourne :
            Le modele mis a jour
        """
        data = {
            entity_field.name: getattr(entity, entity_field.name)
            for entity_field in fields(entity)
            if entity_field.name not in _COMMON_FIELDS
        }
        if "disc_list" in data:
            data["disc_list"] = [asdict(disc) for disc in data["disc_list"]]

        model.media_type = int(entity.media_type)
        model.title = entity.title
        model.format = entity.format
        model.lookup_identifier = entity.lookup_identifier
        model.image_url = entity.image_url
        model.data_json = json.dumps(data)
        model.cover_image_json = (
            json.dumps(_dump_datetimes(asdict(entity.cover_image)))
            if entity.cover_image
            else None
        )
        model.image_lookup_json = (
            json.dumps(_dump_datetimes(asdict(entity.image_lookup)))
            if entity.image_lookup
            else None
        )
        model.has_cover = entity.cover_image is not None
        model.lookup_attempted_at = (
            entity.image_lookup.attempted_at if entity.image_lookup else None
        )
        model.lookup_permanent_failure = bool(
            entity.image_lookup and entity.image_lookup.permanent_failure
        )
        model.updated_at = utcnow()
        return model

    def get_by_id(self, media_type: MediaType, entity_id: str) -> Optional[Entity]:
        """Recupere une entite par categorie et ID interne."""
        try:
            key = int(entity_id)
        except (TypeError, ValueError):
            return None
        statement = (
            select(EntityModel)
            .where(EntityModel.id == key)
            .where(EntityModel.media_type == int(media_type))
        )
        model = self._session.exec(statement).first()
        if model:
            return self._to_entity(model)
        return None

    def save(self, entity: Entity) -> Entity:
        """Sauvegarde une entite (insertion ou mise a jour)."""
        existing = None
        if entity.id:
            existing = self._session.get(EntityModel, int(entity.id))

        model = self._apply(entity, existing or EntityModel(media_type=int(entity.media_type)))
        self._session.add(model)
        self._session.commit()
        self._session.refresh(model)
        entity.id = str(model.id)
        return entity

    def bulk_create(self, entities: list[Entity]) -> list[Entity]:
        """Insere un lot d'entites en une transaction, dans l'ordre fourni."""
        models = []
        for entity in entities:
            model = self._apply(entity, EntityModel(media_type=int(entity.media_type)))
            self._session.add(model)
            models.append(model)
        self._session.commit()

        for entity, model in zip(entities, models):
            self._session.refresh(model)
            entity.id = str(model.id)
        return entities

    def list_missing_images(self, media_type: MediaType, limit: int) -> list[Entity]:
        """
        Liste les entites sans image et sans echec permanent.

        Les entites jamais tentees d'abord, puis les tentatives les plus
        anciennes.
        """
        statement = (
            select(EntityModel)
            .where(EntityModel.media_type == int(media_type))
            .where(EntityModel.has_cover == False)  # noqa: E712
            .where(EntityModel.lookup_permanent_failure == False)  # noqa: E712
            .order_by(
                EntityModel.lookup_attempted_at.is_(None).desc(),
                EntityModel.lookup_attempted_at.asc(),
                EntityModel.id,
            )
            .limit(limit)
        )
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def list_all(self, media_type: MediaType) -> list[Entity]:
        """Liste toutes les entites d'une categorie, par ordre d'insertion."""
        statement = (
            select(EntityModel)
            .where(EntityModel.media_type == int(media_type))
            .order_by(EntityModel.id)
        )
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]
