"""
Tests unitaires pour le registre des convertisseurs.

Ces tests verifient:
- Les convertisseurs par defaut (boolean, duration, integer, date, list)
- Le passage de la valeur brute pour un type inconnu
- L'extension du registre et le convertisseur d'enum strict
"""

from datetime import date

import pytest

from mediaset.core.entities.schema import FieldKind
from mediaset.core.value_objects import MediaType
from mediaset.services.upload import ConversionError, ConverterRegistry, EnumConverter


@pytest.fixture
def registry() -> ConverterRegistry:
    return ConverterRegistry()


class TestBooleanConverter:
    """boolean : "true"/"false", sinon "1" vaut vrai."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("TRUE", True), ("False", False), ("1", True), ("0", False),
         ("yes", False), ("", False)],
    )
    def test_boolean(self, registry: ConverterRegistry, raw: str, expected: bool) -> None:
        assert registry.convert(FieldKind.BOOLEAN, raw) is expected


class TestDurationConverter:
    """duration : "H:MM" ou minutes brutes."""

    def test_hours_and_minutes(self, registry: ConverterRegistry) -> None:
        """"1:38" vaut 98 minutes."""
        assert registry.convert(FieldKind.DURATION, "1:38") == 98

    def test_raw_minutes(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.DURATION, "142") == 142

    def test_zero_hours(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.DURATION, "0:45") == 45

    def test_empty_is_none(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.DURATION, "  ") is None

    @pytest.mark.parametrize("raw", ["1h38", "1:xx", "abc", "1.5", "1:-5", "-1:30", "+90", "-45"])
    def test_malformed_raises(self, registry: ConverterRegistry, raw: str) -> None:
        with pytest.raises(ConversionError) as exc_info:
            registry.convert(FieldKind.DURATION, raw)
        assert exc_info.value.kind == "duration"
        assert exc_info.value.value == raw


class TestIntegerConverter:
    """integer : entier ASCII, independant de la locale."""

    def test_integer(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.INTEGER, " 535 ") == 535

    def test_empty_is_none(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.INTEGER, "") is None

    @pytest.mark.parametrize("raw", ["1 024", "1,024", "12.0", "\u0663"])
    def test_rejects_locale_formats(self, registry: ConverterRegistry, raw: str) -> None:
        """Separateurs de milliers et chiffres non ASCII sont refuses."""
        with pytest.raises(ConversionError):
            registry.convert(FieldKind.INTEGER, raw)


class TestDateConverter:
    """date : ISO strict."""

    def test_iso_date(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.DATE, "1965-08-01") == date(1965, 8, 1)

    @pytest.mark.parametrize("raw", ["01/08/1965", "1965-8-1", "1965-02-30"])
    def test_rejects_non_iso(self, registry: ConverterRegistry, raw: str) -> None:
        with pytest.raises(ConversionError):
            registry.convert(FieldKind.DATE, raw)


class TestListConverter:
    """list : segments separes par "|"."""

    def test_splits_and_trims(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.LIST, " Herbert | Anderson ") == ["Herbert", "Anderson"]

    def test_drops_empty_segments(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.LIST, "Action||  |Drama|") == ["Action", "Drama"]

    def test_empty_cell_is_empty_list(self, registry: ConverterRegistry) -> None:
        assert registry.convert(FieldKind.LIST, "") == []


class TestRegistry:
    """Comportement du registre."""

    def test_unknown_kind_passes_raw_value(self, registry: ConverterRegistry) -> None:
        """Un type sans convertisseur laisse la valeur brute intacte."""
        assert registry.convert(FieldKind.TEXT, "  Dune ") == "  Dune "
        assert registry.convert("isbn", "978") == "978"

    def test_register_adds_converter(self, registry: ConverterRegistry) -> None:
        registry.register("upper", str.upper)
        assert registry.has("upper")
        assert registry.convert("upper", "dune") == "DUNE"

    def test_register_replaces_default(self) -> None:
        registry = ConverterRegistry({"integer": lambda raw: -1})
        assert registry.convert(FieldKind.INTEGER, "5") == -1

    def test_value_error_is_wrapped(self, registry: ConverterRegistry) -> None:
        """Un ValueError d'un convertisseur tiers devient ConversionError."""
        registry.register("float", float)
        with pytest.raises(ConversionError) as exc_info:
            registry.convert("float", "abc")
        assert exc_info.value.kind == "float"


class TestEnumConverter:
    """Convertisseur strict vers une enum."""

    def test_accepts_name_and_defined_value(self) -> None:
        converter = EnumConverter(MediaType)
        assert converter("movies") == MediaType.MOVIES
        assert converter("3") == MediaType.GAMES

    def test_rejects_undefined_integer(self) -> None:
        """Un entier qui n'est pas un membre defini est refuse."""
        with pytest.raises(ConversionError):
            EnumConverter(MediaType)("7")

    def test_empty_is_none(self) -> None:
        assert EnumConverter(MediaType)(" ") is None
