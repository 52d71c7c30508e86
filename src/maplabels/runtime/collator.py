"""String comparison under collator options.

Approximates the renderer's locale-aware collation closely enough to check
name matching: case folding via str.casefold() and diacritic folding by
dropping combining marks after canonical decomposition. Locale-specific
tailorings are not applied.

Python 3.13+. Zero external dependencies.
"""

import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass

from maplabels.enums import CollatorOption

__all__ = ["Collator"]


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


@dataclass(frozen=True, slots=True)
class Collator:
    """Evaluated ["collator", {...}] value.

    Attributes:
        case_sensitive: Distinguish "St" from "st"
        diacritic_sensitive: Distinguish "Montreal" from "Montréal"
        locale: Locale tag the collator was built for, if any
    """

    case_sensitive: bool = False
    diacritic_sensitive: bool = False
    locale: str | None = None

    @classmethod
    def from_options(cls, options: Mapping[str, object]) -> "Collator":
        """Build from a collator options object; missing keys default to insensitive."""
        locale = options.get(CollatorOption.LOCALE.value)
        return cls(
            case_sensitive=bool(options.get(CollatorOption.CASE_SENSITIVE.value, False)),
            diacritic_sensitive=bool(
                options.get(CollatorOption.DIACRITIC_SENSITIVE.value, False)
            ),
            locale=locale if isinstance(locale, str) else None,
        )

    def sort_key(self, text: str) -> str:
        """Return the form two strings share when they collate as equal."""
        if not self.diacritic_sensitive:
            text = _strip_diacritics(text)
        if not self.case_sensitive:
            text = text.casefold()
        return unicodedata.normalize("NFC", text)

    def equals(self, left: str, right: str) -> bool:
        """Compare two strings under this collator."""
        return self.sort_key(left) == self.sort_key(right)
