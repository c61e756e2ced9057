"""
Tests unitaires pour la liaison en-tete -> champ.
"""

from mediaset.core.entities.schema import FieldKind, FieldSpec, schema_for
from mediaset.core.value_objects import MediaType
from mediaset.services.upload import bind_columns, resolve


class TestResolve:
    """Tests pour resolve."""

    def test_matches_declared_name_case_insensitively(self) -> None:
        spec = FieldSpec("title", "Title")
        assert resolve(spec, ["ISBN", "  title  "]) == 1

    def test_explicit_header_only(self) -> None:
        """Avec un en-tete explicite, le nom declare n'est plus reconnu."""
        spec = FieldSpec("authors", "Authors", FieldKind.LIST, header="Author")
        assert resolve(spec, ["Authors"]) is None
        assert resolve(spec, ["Title", "author"]) == 1

    def test_first_matching_column_wins(self) -> None:
        spec = FieldSpec("title", "Title")
        assert resolve(spec, ["Title", "Title"]) == 0

    def test_strips_utf8_bom(self) -> None:
        """Le BOM colle au premier en-tete est ignore."""
        spec = FieldSpec("title", "Title")
        assert resolve(spec, ["\ufeffTitle"]) == 0

    def test_missing_column(self) -> None:
        assert resolve(FieldSpec("plot", "Plot"), ["Title"]) is None


def test_bind_columns_skips_missing_fields() -> None:
    """Seuls les champs presents dans l'en-tete sont lies."""
    bindings = bind_columns(schema_for(MediaType.BOOKS), ["Genre", "Title", "Unknown"])
    assert [(spec.attr, index) for spec, index in bindings] == [("title", 1), ("genres", 0)]
