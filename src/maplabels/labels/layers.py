"""Localization of style layers.

Every symbol layer's `text-field` is a label template whose top-level
`let` declares some of `localizedName`, `localizedCollator` and
`diacriticInsensitiveCollator`. localize_layers() fills those slots for the
user's locale chain. Slots a template does not declare are left alone,
and JSON arrays from a style document are filled the same way.

Python 3.13+.
"""

import logging
from collections.abc import Iterable, MutableMapping, Sequence

from maplabels.constants import LEGACY_NAME_SOURCE_LAYERS
from maplabels.enums import TemplateVariable
from maplabels.localization.types import LocaleTag
from maplabels.syntax import parse, serialize

from .collation import diacritic_insensitive_collator, localized_collator
from .names import localized_name_expression
from .substitution import update_variable

__all__ = ["localize_layers"]

logger = logging.getLogger(__name__)

_LAYOUT = "layout"
_TEXT_FIELD = "text-field"
_SOURCE_LAYER = "source-layer"


def localize_layers(
    layers: Iterable[MutableMapping[str, object]],
    locales: Sequence[LocaleTag],
) -> int:
    """Update the localizable variables of each layer's `text-field` expression.

    A `text-field` may be an expression tree or the raw JSON array of a
    style document read with json.load(). JSON arrays are parsed, filled
    and written back as JSON, so the layer stays serializable.

    Each layer gets its own freshly built sub-expressions, so no two layers
    share a mutable node.

    Args:
        layers: Style layers, as mappings with an optional layout mapping
        locales: Locale chain to insert into each layer

    Returns:
        Number of layers with at least one slot filled

    Raises:
        ExpressionError: If a JSON `text-field` is malformed
    """
    count = 0
    for layer in layers:
        layout = layer.get(_LAYOUT)
        if not isinstance(layout, MutableMapping) or _TEXT_FIELD not in layout:
            continue
        raw = layout[_TEXT_FIELD]
        from_json = isinstance(raw, list)
        text_field = parse(raw) if from_json else raw

        # https://github.com/openmaptiles/openmaptiles/issues/769
        legacy = layer.get(_SOURCE_LAYER) in LEGACY_NAME_SOURCE_LAYERS
        filled = [
            update_variable(
                text_field,  # type: ignore[arg-type]
                TemplateVariable.LOCALIZED_NAME,
                localized_name_expression(locales, include_legacy_fields=legacy),
            ),
            update_variable(
                text_field,  # type: ignore[arg-type]
                TemplateVariable.LOCALIZED_COLLATOR,
                localized_collator(locales),
            ),
            update_variable(
                text_field,  # type: ignore[arg-type]
                TemplateVariable.DIACRITIC_INSENSITIVE_COLLATOR,
                diacritic_insensitive_collator(locales),
            ),
        ]
        if not any(filled):
            logger.debug("Layer %r has no localizable slots", layer.get("id"))
            continue
        if from_json:
            layout[_TEXT_FIELD] = serialize(text_field)  # type: ignore[arg-type]
        count += 1

    logger.debug("Localized %d layer(s) for %s", count, tuple(locales))
    return count
