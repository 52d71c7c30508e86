"""Bilingual labels: the preferred-language name glossed with the local name.

The composer picks the first matching strategy:

1. exact: the names match (case-insensitive) -> show the localized name
2. prefix: the local name starts the localized name at a word boundary,
   ignoring case and, for English, diacritics ("Quebec City" / "Québec")
   -> overwrite that prefix with the local spelling ("Québec City")
3. suffix: the same at the end ("Greater Montreal" / "Montréal")
4. gloss: otherwise -> "Tokyo" on one line, "(東京)" below it

Python 3.13+.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from maplabels.constants import (
    DEFAULT_NAME_FIELD,
    GLOSS_FONT_SCALE,
    HIDDEN_FONT_SCALE,
    INLINE_SEPARATOR,
    LINE_SEPARATOR,
    SUFFIX_BOUNDARY,
    WORD_BOUNDARIES,
    ZERO_WIDTH_SPACE,
)
from maplabels.enums import GlossStrategy, Operator, TemplateVariable
from maplabels.localization.types import LocaleTag
from maplabels.syntax import Call, Expression, LexicalBinding, Literal, call, get, var

from .collation import diacritic_insensitive_collator, localized_collator, placeholder_collator
from .lists import list_values_expression
from .names import localized_name_expression
from .substitution import update_variable

__all__ = [
    "GlossBranch",
    "compose_gloss",
    "ends_with_expression",
    "gloss_branches",
    "localized_name_with_local_gloss_template",
    "overwrite_prefix_expression",
    "overwrite_suffix_expression",
    "starts_with_expression",
]


@dataclass(frozen=True, slots=True)
class GlossBranch:
    """One arm of the gloss `case` expression.

    Attributes:
        strategy: Which rendering strategy the arm implements
        condition: Boolean expression; None for the fallback arm
        output: Expression rendered when the arm is chosen
    """

    strategy: GlossStrategy
    condition: Expression | None
    output: Expression


def starts_with_expression(
    target: Expression,
    candidate_prefix: Expression,
    collator: Expression,
) -> Call:
    """Return an expression testing whether target has the given prefix.

    The character after the prefix must be a word boundary. The target is
    padded with a space so a prefix may also match the whole string
    ("Montreal " vs. "Montréal").
    """
    prefix_length = call(Operator.LENGTH, candidate_prefix)
    return call(
        Operator.ALL,
        call(
            Operator.EQ,
            call(Operator.SLICE, target, 0, prefix_length),
            candidate_prefix,
            collator,
        ),
        call(
            Operator.IN,
            call(
                Operator.SLICE,
                call(Operator.CONCAT, target, WORD_BOUNDARIES[0]),
                prefix_length,
                call(Operator.ADD, prefix_length, 1),
            ),
            WORD_BOUNDARIES,
        ),
    )


def overwrite_prefix_expression(target: Expression, new_prefix: Expression) -> Call:
    """Replace the first len(new_prefix) characters of target with new_prefix."""
    return call(
        Operator.CONCAT,
        new_prefix,
        call(Operator.SLICE, target, call(Operator.LENGTH, new_prefix)),
    )


def ends_with_expression(
    target: Expression,
    candidate_suffix: Expression,
    collator: Expression,
) -> Call:
    """Return an expression testing whether target has the given suffix.

    The character before the suffix must be a space.
    """
    suffix_start = call(
        Operator.SUB,
        call(Operator.LENGTH, target),
        call(Operator.LENGTH, candidate_suffix),
    )
    return call(
        Operator.ALL,
        call(
            Operator.EQ,
            call(Operator.SLICE, target, suffix_start),
            candidate_suffix,
            collator,
        ),
        call(
            Operator.EQ,
            call(
                Operator.SLICE,
                target,
                call(Operator.SUB, suffix_start, 1),
                suffix_start,
            ),
            SUFFIX_BOUNDARY,
        ),
    )


def overwrite_suffix_expression(target: Expression, new_suffix: Expression) -> Call:
    """Replace the last len(new_suffix) characters of target with new_suffix."""
    return call(
        Operator.CONCAT,
        call(
            Operator.SLICE,
            target,
            0,
            call(
                Operator.SUB,
                call(Operator.LENGTH, target),
                call(Operator.LENGTH, new_suffix),
            ),
        ),
        new_suffix,
    )


def _gloss_output(localized_name: Expression, local_name: Expression) -> Call:
    # The renderer lacks bidirectional isolating characters, so a character
    # of the localized name, too small to be drawn, insulates the
    # parentheses from the embedded text's writing direction.
    faux_isolator = call(Operator.SLICE, localized_name, 0, 1)
    gloss_scale = Literal({"font-scale": GLOSS_FONT_SCALE})
    hidden_scale = Literal({"font-scale": HIDDEN_FONT_SCALE})
    return call(
        Operator.FORMAT,
        localized_name,
        LINE_SEPARATOR,
        "(" + ZERO_WIDTH_SPACE,
        gloss_scale,
        call(Operator.CONCAT, faux_isolator, " "),
        hidden_scale,
        list_values_expression(local_name, INLINE_SEPARATOR),
        gloss_scale,
        call(Operator.CONCAT, " ", faux_isolator),
        hidden_scale,
        # A ZWSP keeps the renderer from merging this section with the
        # hidden one before it, which would make it vanish too.
        ZERO_WIDTH_SPACE + ")",
        gloss_scale,
    )


def gloss_branches(
    localized_name: Expression | None = None,
    local_name: Expression | None = None,
) -> tuple[GlossBranch, ...]:
    """Return the four arms of the gloss composer, in evaluation order.

    Args:
        localized_name: Name in the preferred language
            (default: the `localizedName` variable)
        local_name: Name in the local language (default: ["get", "name"])
    """
    localized = localized_name if localized_name is not None else var(TemplateVariable.LOCALIZED_NAME)
    local = local_name if local_name is not None else get(DEFAULT_NAME_FIELD)
    folding_collator = var(TemplateVariable.DIACRITIC_INSENSITIVE_COLLATOR)

    return (
        GlossBranch(
            GlossStrategy.EXACT,
            call(Operator.EQ, localized, local, var(TemplateVariable.LOCALIZED_COLLATOR)),
            call(Operator.FORMAT, list_values_expression(localized, LINE_SEPARATOR)),
        ),
        GlossBranch(
            GlossStrategy.PREFIX,
            starts_with_expression(localized, local, folding_collator),
            call(
                Operator.FORMAT,
                overwrite_prefix_expression(
                    localized, list_values_expression(local, LINE_SEPARATOR)
                ),
            ),
        ),
        GlossBranch(
            GlossStrategy.SUFFIX,
            ends_with_expression(localized, local, folding_collator),
            call(
                Operator.FORMAT,
                overwrite_suffix_expression(
                    localized, list_values_expression(local, LINE_SEPARATOR)
                ),
            ),
        ),
        GlossBranch(GlossStrategy.GLOSS, None, _gloss_output(localized, local)),
    )


def localized_name_with_local_gloss_template(
    local_name: Expression | None = None,
) -> LexicalBinding:
    """The localized name, followed by the local name in parentheses if it differs.

    Returns a fresh template declaring `localizedName`, `localizedCollator`
    and `diacriticInsensitiveCollator`; fill them before use.
    """
    case_args: list[Expression] = []
    for branch in gloss_branches(local_name=local_name):
        if branch.condition is not None:
            case_args.append(branch.condition)
        case_args.append(branch.output)

    return LexicalBinding(
        {
            TemplateVariable.LOCALIZED_NAME: Literal(""),
            TemplateVariable.LOCALIZED_COLLATOR: placeholder_collator(),
            TemplateVariable.DIACRITIC_INSENSITIVE_COLLATOR: placeholder_collator(),
        },
        Call(Operator.CASE, tuple(case_args)),
    )


def compose_gloss(
    locales: Sequence[LocaleTag],
    localized_name: Expression | None = None,
    local_name: Expression | None = None,
) -> LexicalBinding:
    """Build a filled-in gloss label for the given locale chain.

    Args:
        locales: Locale chain, highest priority first
        localized_name: Preferred-language name expression
            (default: localized_name_expression(locales))
        local_name: Local-language name expression (default: ["get", "name"])

    Returns:
        A new, independent expression tree
    """
    template = localized_name_with_local_gloss_template(local_name)
    update_variable(
        template,
        TemplateVariable.LOCALIZED_NAME,
        localized_name if localized_name is not None else localized_name_expression(locales),
        strict=True,
    )
    update_variable(
        template, TemplateVariable.LOCALIZED_COLLATOR, localized_collator(locales), strict=True
    )
    update_variable(
        template,
        TemplateVariable.DIACRITIC_INSENSITIVE_COLLATOR,
        diacritic_insensitive_collator(locales),
        strict=True,
    )
    return template
