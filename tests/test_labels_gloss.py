"""Tests for labels/gloss.py: localized names glossed with the local name.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from maplabels.diagnostics import UndeclaredVariableError
from maplabels.enums import GlossStrategy, Operator, TemplateVariable
from maplabels.labels import (
    compose_gloss,
    ends_with_expression,
    gloss_branches,
    localized_name_with_local_gloss_template,
    overwrite_prefix_expression,
    overwrite_suffix_expression,
    starts_with_expression,
    update_variable,
)
from maplabels.runtime import Formatted, evaluate, render_text, select_gloss_strategy
from maplabels.syntax import Call, LexicalBinding, Literal, get, serialize

_FOLDING = Call(Operator.COLLATOR, (Literal({"diacritic-sensitive": False}),))
_STRICT = Call(Operator.COLLATOR, (Literal({"case-sensitive": True, "diacritic-sensitive": True}),))


def _starts_with(target: str, prefix: str, collator: Call = _FOLDING) -> object:
    return evaluate(starts_with_expression(Literal(target), Literal(prefix), collator))


def _ends_with(target: str, suffix: str, collator: Call = _FOLDING) -> object:
    return evaluate(ends_with_expression(Literal(target), Literal(suffix), collator))


# ============================================================================
# Building blocks
# ============================================================================


class TestAffixMatching:
    """Test prefix and suffix predicates."""

    def test_prefix_at_word_boundary(self) -> None:
        """A prefix followed by a space or comma matches."""
        assert _starts_with("Quebec City", "Québec") is True
        assert _starts_with("Quebec, Canada", "Québec") is True

    def test_prefix_whole_string(self) -> None:
        """The padding space lets the whole string match."""
        assert _starts_with("Montreal", "Montréal") is True

    def test_prefix_inside_word_rejected(self) -> None:
        """A prefix ending mid-word does not match."""
        assert _starts_with("Parisville", "Paris") is False

    def test_prefix_respects_collator(self) -> None:
        """A diacritic-sensitive collator keeps accents significant."""
        assert _starts_with("Montreal", "Montréal", _STRICT) is False

    def test_suffix_after_space(self) -> None:
        """A suffix preceded by a space matches."""
        assert _ends_with("Greater Montreal", "Montréal") is True

    def test_suffix_inside_word_rejected(self) -> None:
        """A suffix preceded by a letter does not match."""
        assert _ends_with("Ville-Marie", "Marie") is False

    def test_suffix_whole_string_rejected(self) -> None:
        """A suffix covering the whole target has no preceding space."""
        assert _ends_with("Montreal", "Montréal") is False

    def test_overwrite_prefix(self) -> None:
        """The first len(new) characters are replaced."""
        expr = overwrite_prefix_expression(Literal("Quebec City"), Literal("Québec"))
        assert evaluate(expr) == "Québec City"

    def test_overwrite_suffix(self) -> None:
        """The last len(new) characters are replaced."""
        expr = overwrite_suffix_expression(Literal("Greater Montreal"), Literal("Montréal"))
        assert evaluate(expr) == "Greater Montréal"


class TestGlossBranches:
    """Test the composer arms."""

    def test_order(self) -> None:
        """Arms are tried exact, prefix, suffix, then gloss."""
        strategies = [branch.strategy for branch in gloss_branches()]
        assert strategies == [
            GlossStrategy.EXACT,
            GlossStrategy.PREFIX,
            GlossStrategy.SUFFIX,
            GlossStrategy.GLOSS,
        ]

    def test_only_last_arm_is_unconditional(self) -> None:
        """The fallback arm has no condition."""
        conditions = [branch.condition for branch in gloss_branches()]
        assert all(condition is not None for condition in conditions[:-1])
        assert conditions[-1] is None

    def test_template_declares_three_slots(self) -> None:
        """The template binds the name and both collators."""
        template = localized_name_with_local_gloss_template()
        assert list(template.bindings) == [
            TemplateVariable.LOCALIZED_NAME,
            TemplateVariable.LOCALIZED_COLLATOR,
            TemplateVariable.DIACRITIC_INSENSITIVE_COLLATOR,
        ]
        assert serialize(template)[:7] == [
            "let",
            "localizedName",
            "",
            "localizedCollator",
            ["collator", {}],
            "diacriticInsensitiveCollator",
            ["collator", {}],
        ]

    def test_template_body_is_case(self) -> None:
        """Three conditions and four outputs make a seven-argument case."""
        body = localized_name_with_local_gloss_template().body
        assert isinstance(body, Call)
        assert body.operator == Operator.CASE
        assert len(body.args) == 7

    def test_custom_local_name(self) -> None:
        """The local name expression can be swapped."""
        template = localized_name_with_local_gloss_template(get("name:ja"))
        assert "name:ja" in str(serialize(template))


# ============================================================================
# Composed labels
# ============================================================================


class TestComposeGloss:
    """Test complete gloss labels."""

    def test_fills_all_slots(self) -> None:
        """No placeholder survives composition."""
        label = compose_gloss(["fr"])
        assert isinstance(label, LexicalBinding)
        assert serialize(label)[2] == ["coalesce", ["get", "name:fr"], ["get", "name"]]
        assert ["collator", {}] not in serialize(label)

    def test_template_without_slots_fails_loudly(self) -> None:
        """Filling a template that lacks a slot is an error."""
        template = localized_name_with_local_gloss_template()
        del template.bindings[TemplateVariable.LOCALIZED_COLLATOR]
        with pytest.raises(UndeclaredVariableError):
            update_variable(
                template, TemplateVariable.LOCALIZED_COLLATOR, Literal(None), strict=True
            )

    def test_exact_match(self) -> None:
        """Matching names show the localized name alone."""
        properties = {"name": "Paris", "name:fr": "Paris"}
        assert select_gloss_strategy(properties, ["fr"]) is GlossStrategy.EXACT
        assert render_text(compose_gloss(["fr"]), properties) == "Paris"

    def test_exact_match_ignores_case(self) -> None:
        """The exact arm is case-insensitive and shows the localized spelling."""
        properties = {"name": "PARIS", "name:fr": "Paris"}
        assert select_gloss_strategy(properties, ["fr"]) is GlossStrategy.EXACT
        assert render_text(compose_gloss(["fr"]), properties) == "Paris"

    def test_no_localized_name_falls_back_to_local(self) -> None:
        """Without a translation the local name matches itself."""
        properties = {"name": "東京"}
        assert select_gloss_strategy(properties, ["en"]) is GlossStrategy.EXACT
        assert render_text(compose_gloss(["en"]), properties) == "東京"

    def test_prefix_overwrite_in_english(self) -> None:
        """English folds diacritics, so the local spelling replaces the prefix."""
        properties = {"name": "Montréal", "name:en": "Montreal"}
        assert select_gloss_strategy(properties, ["en"]) is GlossStrategy.PREFIX
        assert render_text(compose_gloss(["en"]), properties) == "Montréal"

    def test_prefix_overwrite_keeps_rest(self) -> None:
        """Text after the prefix is kept."""
        properties = {"name": "Québec", "name:en": "Quebec City"}
        assert select_gloss_strategy(properties, ["en-CA", "en"]) is GlossStrategy.PREFIX
        assert render_text(compose_gloss(["en-CA", "en"]), properties) == "Québec City"

    def test_suffix_overwrite(self) -> None:
        """A suffix match overwrites the end of the localized name."""
        properties = {"name": "Montréal", "name:en": "Greater Montreal"}
        assert select_gloss_strategy(properties, ["en"]) is GlossStrategy.SUFFIX
        assert render_text(compose_gloss(["en"]), properties) == "Greater Montréal"

    def test_diacritics_significant_outside_english(self) -> None:
        """Other languages keep diacritics, so the names are glossed."""
        properties = {"name": "Montréal", "name:de": "Montreal"}
        assert select_gloss_strategy(properties, ["de"]) is GlossStrategy.GLOSS

    def test_gloss(self) -> None:
        """Unrelated names are glossed in parentheses on a new line."""
        properties = {"name": "東京", "name:en": "Tokyo"}
        label = compose_gloss(["en"])

        assert select_gloss_strategy(properties, ["en"]) is GlossStrategy.GLOSS
        text = render_text(label, properties)
        assert text == "Tokyo\n(東京)"
        assert " ".join(text.split()) == "Tokyo (東京)"

    def test_gloss_sections(self) -> None:
        """The gloss is scaled down and isolated by hidden characters."""
        properties = {"name": "東京", "name:en": "Tokyo"}
        result = evaluate(compose_gloss(["en"]), properties)

        assert isinstance(result, Formatted)
        scales = [section.font_scale for section in result.sections]
        assert scales == [None, None, 0.8, 0.001, 0.8, 0.001, 0.8]
        assert result.sections[3].text == "T "
        assert result.sections[5].text == " T"
        assert result.text == "Tokyo\n(\u200bT 東京 T\u200b)"

    def test_gloss_lists_local_values_inline(self) -> None:
        """Multiple local names are joined with a bullet."""
        properties = {"name": "Biel;Bienne", "name:en": "Biel/Bienne"}
        text = render_text(compose_gloss(["en"]), properties)
        assert text == "Biel/Bienne\n(Biel • Bienne)"

    def test_exact_match_stacks_values(self) -> None:
        """Multiple localized values go on separate lines."""
        properties = {"name": "Gent;Ghent", "name:nl": "Gent;Ghent"}
        assert render_text(compose_gloss(["nl"]), properties) == "Gent\nGhent"

    def test_nameless_feature_draws_no_label(self) -> None:
        """A feature without any name field has no label and no strategy."""
        assert select_gloss_strategy({}, ["en"]) is None
        assert render_text(compose_gloss(["en"]), {}) is None

    def test_missing_local_name_draws_no_label(self) -> None:
        """Without a local name the comparisons fail and the label is dropped."""
        properties = {"name:en": "Tokyo"}
        assert select_gloss_strategy(properties, ["en"]) is None
        assert render_text(compose_gloss(["en"]), properties) is None

    def test_composed_labels_are_independent(self) -> None:
        """Composing twice never shares mutable nodes."""
        first = compose_gloss(["fr"])
        second = compose_gloss(["fr"])
        update_variable(first, TemplateVariable.LOCALIZED_NAME, "x")
        assert serialize(second)[2] == ["coalesce", ["get", "name:fr"], ["get", "name"]]

    @given(name=st.text(alphabet="abcdefgh", min_size=1, max_size=8))
    def test_same_name_is_always_exact(self, name: str) -> None:
        """PROPERTY: identical names never produce a gloss."""
        properties = {"name": name, "name:en": name}
        assert select_gloss_strategy(properties, ["en"]) is GlossStrategy.EXACT
        assert render_text(compose_gloss(["en"]), properties) == name
