"""Collator expressions for name comparison.

Both collators the label templates use are case-insensitive. The
diacritic-insensitive one only folds diacritics for English: English
names rarely carry diacritics except when naming foreign places, where
"Montreal" should still be recognized as "Montréal".

Python 3.13+.
"""

import re
from collections.abc import Sequence

from maplabels.enums import CollatorOption, Operator
from maplabels.localization.types import LocaleTag
from maplabels.syntax import Call, Literal

__all__ = [
    "collator_expression",
    "diacritic_insensitive_collator",
    "folds_diacritics",
    "localized_collator",
    "placeholder_collator",
]

_ENGLISH = re.compile(r"^en\b")


def folds_diacritics(locale: LocaleTag | None) -> bool:
    """Whether name matching for this locale ignores diacritics."""
    return locale is not None and _ENGLISH.match(locale) is not None


def collator_expression(
    locale: LocaleTag | None,
    *,
    case_sensitive: bool = False,
    diacritic_sensitive: bool = True,
) -> Call:
    """Return ["collator", {options}] for the given locale.

    The locale key is omitted when there is no locale, leaving the choice
    to the renderer's default.
    """
    options: dict[str, object] = {
        CollatorOption.CASE_SENSITIVE.value: case_sensitive,
        CollatorOption.DIACRITIC_SENSITIVE.value: diacritic_sensitive,
    }
    if locale is not None:
        options[CollatorOption.LOCALE.value] = locale
    return Call(Operator.COLLATOR, (Literal(options),))


def localized_collator(locales: Sequence[LocaleTag]) -> Call:
    """Case-insensitive, diacritic-sensitive collator for the primary locale."""
    return collator_expression(locales[0] if locales else None)


def diacritic_insensitive_collator(locales: Sequence[LocaleTag]) -> Call:
    """Collator for prefix/suffix matching; folds diacritics only in English."""
    primary = locales[0] if locales else None
    return collator_expression(primary, diacritic_sensitive=not folds_diacritics(primary))


def placeholder_collator() -> Call:
    """Empty collator bound by templates until the locale is known."""
    return Call(Operator.COLLATOR, (Literal({}),))
