"""Locale preference resolution and locale type aliases.

Python 3.13+.
"""

from .chain import (
    LocalePreferences,
    expand_locale,
    expand_locales,
    parse_language_parameter,
    read_language_parameter,
    resolve_locales,
    split_override,
)
from .types import LocaleChain, LocaleTag

__all__ = [
    "LocaleChain",
    "LocalePreferences",
    "LocaleTag",
    "expand_locale",
    "expand_locales",
    "parse_language_parameter",
    "read_language_parameter",
    "resolve_locales",
    "split_override",
]
