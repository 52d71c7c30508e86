"""Tests for labels/names.py and labels/collation.py.

Python 3.13+.
"""

from __future__ import annotations

from hypothesis import given

from maplabels.labels import (
    collator_expression,
    diacritic_insensitive_collator,
    folds_diacritics,
    localized_collator,
    localized_name_expression,
    name_fields,
)
from maplabels.runtime import Collator, evaluate
from maplabels.syntax import referenced_fields, serialize
from tests.strategies import locale_chains


class TestNameFields:
    """Test property keys for one locale."""

    def test_colon_form(self) -> None:
        """Names are keyed name:<tag>."""
        assert name_fields("fr") == ("name:fr",)

    def test_legacy_form_for_german_and_english(self) -> None:
        """Only de and en have an underscore form."""
        assert name_fields("de", include_legacy_fields=True) == ("name:de", "name_de")
        assert name_fields("en", include_legacy_fields=True) == ("name:en", "name_en")
        assert name_fields("fr", include_legacy_fields=True) == ("name:fr",)

    def test_legacy_form_off_by_default(self) -> None:
        """Legacy fields must be requested."""
        assert name_fields("en") == ("name:en",)


class TestLocalizedNameExpression:
    """Test the coalesce expression over name fields."""

    def test_chain_order_then_name(self) -> None:
        """Fields follow the chain and end with the generic name."""
        expr = localized_name_expression(["zh-Hant-TW", "zh-Hant", "zh"])
        assert serialize(expr) == [
            "coalesce",
            ["get", "name:zh-Hant-TW"],
            ["get", "name:zh-Hant"],
            ["get", "name:zh"],
            ["get", "name"],
        ]

    def test_legacy_fields_follow_their_colon_field(self) -> None:
        """Underscore fields come right after the matching colon field."""
        expr = localized_name_expression(["en-US", "en", "de"], include_legacy_fields=True)
        assert referenced_fields(expr) == (
            "name:en-US",
            "name:en",
            "name_en",
            "name:de",
            "name_de",
            "name",
        )

    def test_empty_chain_reads_name(self) -> None:
        """With no locales the generic name is used."""
        assert serialize(localized_name_expression([])) == ["coalesce", ["get", "name"]]

    def test_first_present_field_wins(self) -> None:
        """Evaluation picks the first field the feature has."""
        expr = localized_name_expression(["zh-Hant-TW", "zh-Hant", "zh"])
        properties = {"name": "台北", "name:zh": "台北市", "name:zh-Hant": "臺北"}
        assert evaluate(expr, properties) == "臺北"

    def test_falls_back_to_local_name(self) -> None:
        """Without any localized field the local name is shown."""
        expr = localized_name_expression(["fr"])
        assert evaluate(expr, {"name": "München"}) == "München"

    def test_no_name_is_null(self) -> None:
        """A feature without names evaluates to null."""
        assert evaluate(localized_name_expression(["fr"]), {}) is None

    @given(chain=locale_chains())
    def test_fields_match_chain(self, chain: list[str]) -> None:
        """PROPERTY: one field per locale, plus name, in chain order."""
        fields = referenced_fields(localized_name_expression(chain))
        assert fields == (*(f"name:{tag}" for tag in chain), "name")


class TestCollators:
    """Test collator expressions."""

    def test_english_folds_diacritics(self) -> None:
        """Only English ignores diacritics."""
        assert folds_diacritics("en")
        assert folds_diacritics("en-GB")
        assert not folds_diacritics("fr")
        assert not folds_diacritics("eng")
        assert not folds_diacritics(None)

    def test_localized_collator(self) -> None:
        """The localized collator is case-insensitive and diacritic-sensitive."""
        assert serialize(localized_collator(["fr-CA", "fr"])) == [
            "collator",
            {"case-sensitive": False, "diacritic-sensitive": True, "locale": "fr-CA"},
        ]

    def test_diacritic_insensitive_collator_english(self) -> None:
        """For English the matching collator folds diacritics."""
        assert serialize(diacritic_insensitive_collator(["en"])) == [
            "collator",
            {"case-sensitive": False, "diacritic-sensitive": False, "locale": "en"},
        ]

    def test_diacritic_insensitive_collator_other(self) -> None:
        """Elsewhere it stays diacritic-sensitive."""
        options = serialize(diacritic_insensitive_collator(["de"]))[1]  # type: ignore[index]
        assert options["diacritic-sensitive"] is True  # type: ignore[index]

    def test_no_locale_key_without_chain(self) -> None:
        """An empty chain leaves the locale to the renderer."""
        assert serialize(collator_expression(None)) == [
            "collator",
            {"case-sensitive": False, "diacritic-sensitive": True},
        ]
        assert serialize(localized_collator([])) == serialize(collator_expression(None))

    def test_evaluates_to_collator(self) -> None:
        """The reference evaluator reads the options."""
        assert evaluate(diacritic_insensitive_collator(["en"])) == Collator(
            case_sensitive=False, diacritic_sensitive=False, locale="en"
        )
