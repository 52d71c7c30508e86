"""Localized name field selection.

Builds the `coalesce` expression that resolves to a feature's name in the
first language of the locale chain that the feature has a name for,
falling back to the generic `name` field (the local-language spelling).

Python 3.13+.
"""

from collections.abc import Iterable

from maplabels.constants import DEFAULT_NAME_FIELD, LEGACY_NAME_FIELD_LOCALES
from maplabels.enums import Operator
from maplabels.localization.types import LocaleTag
from maplabels.syntax import Call, get

__all__ = ["localized_name_expression", "name_fields"]


def name_fields(locale: LocaleTag, include_legacy_fields: bool = False) -> tuple[str, ...]:
    """Return the feature property keys holding the name in one locale.

    Args:
        locale: Locale tag
        include_legacy_fields: Also return the underscore form (name_de,
            name_en) for layers that never moved to the colon syntax

    Example:
        >>> name_fields("fr")
        ('name:fr',)
        >>> name_fields("en", include_legacy_fields=True)
        ('name:en', 'name_en')
    """
    fields = [f"name:{locale}"]
    # transportation_name uses an underscore instead of a colon.
    # https://github.com/openmaptiles/openmaptiles/issues/769
    if include_legacy_fields and locale in LEGACY_NAME_FIELD_LOCALES:
        fields.append(f"name_{locale}")
    return tuple(fields)


def localized_name_expression(
    locales: Iterable[LocaleTag],
    include_legacy_fields: bool = False,
) -> Call:
    """Return a `coalesce` expression resolving to the preferred name.

    Evaluates to the first present field, in chain order, ending with the
    generic `name` field. Evaluates to null when the feature has no name;
    callers treat that as "no name available".

    Args:
        locales: Locale chain, highest priority first
        include_legacy_fields: Whether to include the older underscore
            fields after their colon counterparts
    """
    fields = [field for locale in locales for field in name_fields(locale, include_legacy_fields)]
    fields.append(DEFAULT_NAME_FIELD)
    return Call(Operator.COALESCE, tuple(get(field) for field in fields))
