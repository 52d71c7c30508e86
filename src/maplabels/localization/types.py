"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user
code when annotating call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "LocaleChain",
    "LocaleTag",
]

type LocaleTag = str
"""BCP-47 locale tag (e.g., 'en', 'pt-BR', 'zh-Hant-TW')."""

type LocaleChain = tuple[LocaleTag, ...]
"""Ordered fallback sequence, most specific and highest priority first, no duplicates."""
