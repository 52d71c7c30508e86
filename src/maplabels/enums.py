"""Enumerations for maplabels type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so they serialize directly into
style JSON without boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class Operator(StrEnum):
    """Expression operators emitted by the compiler.

    The values are the exact operator names of the MapLibre style
    expression language. Renaming any of them breaks the output contract.
    """

    GET = "get"
    VAR = "var"
    LET = "let"
    LITERAL = "literal"
    COALESCE = "coalesce"
    CASE = "case"
    ALL = "all"
    IN = "in"
    EQ = "=="
    NE = "!="
    GE = ">="
    ADD = "+"
    SUB = "-"
    SLICE = "slice"
    INDEX_OF = "index-of"
    CONCAT = "concat"
    LENGTH = "length"
    COLLATOR = "collator"
    FORMAT = "format"


class TemplateVariable(StrEnum):
    """Variables pre-declared by the label templates.

    Layer localization overwrites these slots in place, so every template
    that wants one filled must bind it up front.
    """

    LOCALIZED_NAME = "localizedName"
    """Name in the user's preferred language"""

    LOCALIZED_COLLATOR = "localizedCollator"
    """Case-insensitive, diacritic-sensitive collator"""

    DIACRITIC_INSENSITIVE_COLLATOR = "diacriticInsensitiveCollator"
    """Collator used for prefix/suffix matching"""


class CollatorOption(StrEnum):
    """Keys recognized in a collator options object."""

    CASE_SENSITIVE = "case-sensitive"
    DIACRITIC_SENSITIVE = "diacritic-sensitive"
    LOCALE = "locale"


class GlossStrategy(StrEnum):
    """Branch chosen by the bilingual gloss composer.

    StrEnum provides automatic string conversion: str(GlossStrategy.EXACT) == "exact"
    """

    EXACT = "exact"
    """Localized and local names match; show one"""

    PREFIX = "prefix"
    """Local name is a word-bounded prefix; overwrite it"""

    SUFFIX = "suffix"
    """Local name is a word-bounded suffix; overwrite it"""

    GLOSS = "gloss"
    """Unrelated names; show the local name in parentheses"""


__all__ = [
    "CollatorOption",
    "GlossStrategy",
    "Operator",
    "TemplateVariable",
]
