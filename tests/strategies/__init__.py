"""Hypothesis strategies for maplabels property-based testing.

Strategies are organized by domain:

- locales: Locale tags, chains and override strings
- text: Haystacks, needles and ";"-delimited value lists

Usage:
    from tests.strategies import locale_tags, value_lists

Event-Emitting Strategies:
    - locale_tags: Emits locale_shape=language|script|territory|full
    - value_lists: Emits value_list_size=N and value_list_escapes=yes|no
"""

from .locales import LOCALE_POOL, locale_chains, locale_overrides, locale_tags
from .text import haystacks, needles, value_lists

__all__ = [
    "LOCALE_POOL",
    "haystacks",
    "locale_chains",
    "locale_overrides",
    "locale_tags",
    "needles",
    "value_lists",
]
