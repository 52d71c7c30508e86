"""Localized Style Example - Filling label templates for a locale chain.

Demonstrates the full compile path for a small MapLibre style:

1. Resolving the locale chain from a URL fragment override
2. Localizing every symbol layer's text-field template
3. Writing the style back as JSON
4. Previewing labels with the reference evaluator

Python 3.13+.
"""

from __future__ import annotations

import json

from maplabels import LocalePreferences, localize_layers, parse, serialize
from maplabels.labels import localized_name_template, localized_name_with_local_gloss_template
from maplabels.runtime import render_text, select_gloss_strategy

FEATURES = [
    {"name": "Montréal", "name:en": "Montreal", "name:fr": "Montréal"},
    {"name": "東京", "name:en": "Tokyo", "name:zh-Hant": "東京"},
    {"name": "Biel;Bienne", "name:en": "Biel/Bienne"},
    {"name": "Gent;Ghent", "name:nl": "Gent;Ghent"},
]


def build_style() -> list[dict[str, object]]:
    """A style with one plain and one glossed label layer."""
    return [
        {
            "id": "road-label",
            "type": "symbol",
            "source-layer": "transportation_name",
            "layout": {"text-field": localized_name_template()},
        },
        {
            "id": "place-label",
            "type": "symbol",
            "source-layer": "place",
            "layout": {"text-field": localized_name_with_local_gloss_template()},
        },
    ]


def example_1_resolve_chain() -> LocalePreferences:
    """Example 1: Locale chain from a URL override."""
    print("=" * 60)
    print("Example 1: Locale chain")
    print("=" * 60)

    prefs = LocalePreferences.from_url(
        "https://example.com/map#map=5/45.5/-73.6&language=en-CA", agent_locales=["fr-CA"]
    )
    print(f"override: {prefs.override!r}")
    print(f"chain:    {prefs.chain}")
    return prefs


def example_2_localize(prefs: LocalePreferences) -> list[dict[str, object]]:
    """Example 2: Fill every layer's template."""
    print("\n" + "=" * 60)
    print("Example 2: Localized layers")
    print("=" * 60)

    style = build_style()
    count = localize_layers(style, prefs.chain)
    print(f"localized {count} layer(s)")

    road = style[0]["layout"]["text-field"]  # type: ignore[index]
    print(json.dumps(serialize(road), ensure_ascii=False)[:120] + " ...")
    return style


def example_3_preview(prefs: LocalePreferences, style: list[dict[str, object]]) -> None:
    """Example 3: Preview rendered place labels."""
    print("\n" + "=" * 60)
    print("Example 3: Label preview")
    print("=" * 60)

    # Serialized styles are read back before previewing, as a renderer would.
    place = parse(serialize(style[1]["layout"]["text-field"]))  # type: ignore[index,arg-type]
    for feature in FEATURES:
        strategy = select_gloss_strategy(feature, prefs.chain)
        text = render_text(place, feature)
        print(f"{feature['name']!r:16} {str(strategy):7} -> {text!r}")


if __name__ == "__main__":
    preferences = example_1_resolve_chain()
    localized_style = example_2_localize(preferences)
    example_3_preview(preferences, localized_style)
