"""
Tests pour les entites du catalogue (Book, Movie, Game, Music).

Verifie l'identifiant de recherche, la detection des lignes vides et
l'etat d'enrichissement derive.
"""

from datetime import datetime, timezone

import pytest

from mediaset.core.entities.media import (
    Book,
    CoverImage,
    Disc,
    Game,
    ImageLookup,
    LookupState,
    Movie,
    Music,
    UnknownMediaTypeError,
    entity_class_for,
    lookup_state,
)
from mediaset.core.value_objects import MediaType


class TestLookupIdentifier:
    """Tests pour Entity.lookup_identifier."""

    def test_book_uses_isbn(self):
        """Le livre est identifie par son ISBN."""
        assert Book(isbn=" 9780441172719 ").lookup_identifier == "9780441172719"

    @pytest.mark.parametrize("entity_cls", [Movie, Game, Music])
    def test_other_variants_use_barcode(self, entity_cls):
        """Films, jeux et musique sont identifies par leur code-barres."""
        assert entity_cls(barcode="883929247318").lookup_identifier == "883929247318"

    def test_blank_identifier_is_none(self):
        """Un identifiant vide ou blanc vaut None."""
        assert Book(isbn="   ").lookup_identifier is None
        assert Movie().lookup_identifier is None


class TestIsEmpty:
    """Tests pour Entity.is_empty."""

    def test_new_entity_is_empty(self):
        """Une entite sans donnee est vide."""
        assert Book().is_empty()
        assert Music().is_empty()

    def test_blank_strings_are_empty(self):
        """Les chaines blanches ne comptent pas comme donnees."""
        assert Movie(title="  ", plot="").is_empty()

    def test_any_field_makes_entity_non_empty(self):
        """Un seul champ renseigne suffit."""
        assert not Book(pages=120).is_empty()
        assert not Game(genres=["RPG"]).is_empty()
        assert not Movie(is_tv_series=True).is_empty()

    def test_id_and_lookup_state_are_ignored(self):
        """L'ID et le bloc de recherche ne sont pas des donnees importees."""
        entity = Book(id="12", image_lookup=ImageLookup(attempted_at=datetime.now(timezone.utc)))
        assert entity.is_empty()


class TestLookupState:
    """Tests pour lookup_state."""

    def test_never_attempted(self):
        assert lookup_state(Book(title="Dune")) == LookupState.NEVER_ATTEMPTED

    def test_succeeded_when_cover_present(self):
        cover = CoverImage(
            file_name="1-a.jpg", file_path="books/1-a.jpg", content_type="image/jpeg", file_size=10
        )
        entity = Book(
            title="Dune",
            cover_image=cover,
            image_lookup=ImageLookup(attempted_at=datetime.now(timezone.utc)),
        )
        assert lookup_state(entity) == LookupState.SUCCEEDED

    def test_failed_retryable(self):
        lookup = ImageLookup(attempted_at=datetime.now(timezone.utc), failure_reason="No match")
        assert lookup_state(Movie(image_lookup=lookup)) == LookupState.FAILED_RETRYABLE

    def test_failed_permanent(self):
        lookup = ImageLookup(
            attempted_at=datetime.now(timezone.utc),
            failure_reason="No lookup identifier available",
            permanent_failure=True,
        )
        assert lookup_state(Movie(image_lookup=lookup)) == LookupState.FAILED_PERMANENT


class TestEntityRegistry:
    """Tests pour entity_class_for."""

    @pytest.mark.parametrize(
        "media_type,expected",
        [
            (MediaType.BOOKS, Book),
            (MediaType.MOVIES, Movie),
            (MediaType.GAMES, Game),
            (MediaType.MUSICS, Music),
        ],
    )
    def test_each_media_type_has_a_variant(self, media_type, expected):
        assert entity_class_for(media_type) is expected
        assert expected.media_type == media_type

    def test_unknown_media_type_raises(self):
        with pytest.raises(UnknownMediaTypeError):
            entity_class_for(99)


def test_music_disc_list_defaults_to_new_list():
    """Chaque Music recoit sa propre liste de pistes."""
    first, second = Music(), Music()
    first.disc_list.append(Disc(track_number=1, title="Airbag", duration="4:44"))
    assert second.disc_list == []
