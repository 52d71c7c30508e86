"""Locale utilities for tag normalization, validation and discovery.

Centralizes locale format handling used throughout the codebase. Name
fields and collators use BCP-47 tags (hyphen separated), while the process
environment reports POSIX identifiers (underscore separated, with optional
encoding and modifier suffixes).

Python 3.13+.
"""

from __future__ import annotations

import locale as locale_module
import logging
import os

from babel.core import parse_locale

from maplabels.constants import DEFAULT_LOCALE

__all__ = [
    "get_agent_locales",
    "locale_tag_error",
    "posix_locale_tag",
    "strip_posix_suffixes",
]

logger = logging.getLogger(__name__)

_PSEUDO_LOCALES = frozenset({"C", "POSIX"})


def strip_posix_suffixes(locale_code: str) -> str:
    """Drop the encoding and modifier suffixes of a POSIX identifier.

    Example:
        >>> strip_posix_suffixes("sr_RS.UTF-8@latin")
        'sr_RS'
    """
    return locale_code.split("@", 1)[0].split(".", 1)[0]


def locale_tag_error(tag: str) -> str | None:
    """Check that a string can name a `name:<tag>` field.

    Only the shape is checked: hyphen-separated subtags of letters, digits
    or underscores. OpenStreetMap keys go beyond what locale identifier
    parsers accept (name:zh-min-nan, name:be-x-old, name:zh_pinyin), so no
    subtag grammar is imposed.

    Args:
        tag: Locale tag as written in an override

    Returns:
        None if the tag is usable, otherwise a short reason

    Example:
        >>> locale_tag_error("zh-min-nan") is None
        True
        >>> locale_tag_error("en US")
        "unexpected character ' '"
    """
    if not tag:
        return "empty tag"
    for char in tag:
        if not (char.isascii() and (char.isalnum() or char in "-_")):
            return f"unexpected character {char!r}"
    if "" in tag.split("-"):
        return "empty subtag"
    return None


def posix_locale_tag(identifier: str) -> str | None:
    """Convert a locale identifier from the environment to a BCP-47 tag.

    Babel parses the identifier, so encoding and modifier suffixes are
    dropped and subtag case is canonicalized.

    Args:
        identifier: POSIX identifier (e.g., "zh_Hant_TW.UTF-8")

    Returns:
        BCP-47 tag, or None if Babel cannot parse the identifier

    Example:
        >>> posix_locale_tag("sr_RS.UTF-8@latin")
        'sr-RS'
        >>> posix_locale_tag("zh_Hant_TW")
        'zh-Hant-TW'
    """
    try:
        language, territory, script, variant = parse_locale(identifier.replace("-", "_"))[:4]
    except ValueError as e:
        logger.debug("Ignoring unparseable locale %r: %s", identifier, e)
        return None
    return "-".join(part for part in (language, script, territory, variant) if part)


def get_agent_locales() -> tuple[str, ...]:
    """Detect the user's preferred locales from the process environment.

    The command-line analogue of a browser's navigator.languages.

    Detection order:
    1. LANGUAGE environment variable (colon-separated priority list)
    2. LC_ALL, LC_MESSAGES, LANG environment variables (first one set)
    3. Python locale.getlocale() (OS-level locale)

    Filters out "C" and "POSIX" pseudo-locales and converts identifiers to
    BCP-47 tags.

    Returns:
        Tuple of BCP-47 tags, never empty. Returns (DEFAULT_LOCALE,) when
        nothing is configured.

    Example:
        >>> import os
        >>> os.environ["LANGUAGE"] = "fr_CA:fr:en"
        >>> get_agent_locales()
        ('fr-CA', 'fr', 'en')
    """
    priority_list = os.environ.get("LANGUAGE")
    if priority_list:
        tags = tuple(
            tag
            for tag in map(_agent_tag, priority_list.split(":"))
            if tag is not None
        )
        if tags:
            logger.debug("Agent locales from LANGUAGE: %s", tags)
            return tags

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        tag = _agent_tag(os.environ.get(var) or "")
        if tag is not None:
            logger.debug("Agent locale from %s: %s", var, tag)
            return (tag,)

    try:
        system_locale, _ = locale_module.getlocale()
    except ValueError:
        system_locale = None
    tag = _agent_tag(system_locale or "")
    if tag is not None:
        return (tag,)

    logger.debug("No agent locale configured; using %s", DEFAULT_LOCALE)
    return (DEFAULT_LOCALE,)


def _agent_tag(identifier: str) -> str | None:
    code = strip_posix_suffixes(identifier)
    if not code or code in _PSEUDO_LOCALES:
        return None
    return posix_locale_tag(code)
