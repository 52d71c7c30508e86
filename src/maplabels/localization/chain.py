"""Locale preference resolution.

Turns an optional comma-separated override (read from the `language` key
of a URL fragment) and the agent's own locale list into a LocaleChain:
every tag followed by its progressively less specific parents, with no
tag repeated.

    override "zh-Hant-TW,en-US"  ->  ("zh-Hant-TW", "zh-Hant", "zh", "en-US", "en")

The chain is immutable and built once per locale change.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

from maplabels.constants import LANGUAGE_PARAMETER
from maplabels.diagnostics import ErrorTemplate
from maplabels.locale_utils import get_agent_locales, locale_tag_error

from .types import LocaleChain, LocaleTag

__all__ = [
    "LocalePreferences",
    "expand_locale",
    "expand_locales",
    "parse_language_parameter",
    "read_language_parameter",
    "resolve_locales",
    "split_override",
]

logger = logging.getLogger(__name__)


def read_language_parameter(url: str) -> str | None:
    """Read the raw `language` value from a URL fragment.

    This is the raw parsing step: an explicitly empty value is returned as
    "" and a missing key as None, so callers can tell the two apart.

    Args:
        url: Full URL or bare fragment ("#language=fr,de")

    Returns:
        The first `language` value, "" if present but empty, None if absent

    Example:
        >>> read_language_parameter("https://example.com/map#language=fr,de")
        'fr,de'
        >>> read_language_parameter("#language=")
        ''
        >>> read_language_parameter("#map=5/40/-100") is None
        True
    """
    fragment = urlsplit(url).fragment
    values = parse_qs(fragment, keep_blank_values=True).get(LANGUAGE_PARAMETER)
    if not values:
        return None
    return values[0]


def parse_language_parameter(url: str) -> str | None:
    """Return the `language` override of a URL, or None if there is none.

    An explicitly empty value means "no override" and maps to None, the
    same as a missing key.
    """
    value = read_language_parameter(url)
    return None if value == "" else value


def split_override(override: str | None) -> list[str] | None:
    """Split a comma-separated override into tags.

    Returns None for a missing or empty override.
    """
    if not override:
        return None
    return override.split(",")


def expand_locale(tag: LocaleTag) -> tuple[LocaleTag, ...]:
    """Return a tag followed by its progressively less specific parents.

    Example:
        >>> expand_locale("zh-Hant-TW")
        ('zh-Hant-TW', 'zh-Hant', 'zh')
    """
    components = tag.split("-")
    parents: list[LocaleTag] = []
    while components:
        parents.append("-".join(components))
        components.pop()
    return tuple(parents)


def expand_locales(tags: Iterable[LocaleTag]) -> LocaleChain:
    """Expand every tag into its parents, keeping the first occurrence only."""
    seen: dict[LocaleTag, None] = {}
    for tag in tags:
        for parent in expand_locale(tag):
            seen.setdefault(parent)
    return tuple(seen)


def _override_tags(override: str | None) -> list[LocaleTag] | None:
    """Return the usable tags of an override, or None to use the agent list."""
    raw_tags = split_override(override)
    if raw_tags is None:
        return None

    tags: list[LocaleTag] = []
    for raw_tag in raw_tags:
        tag = raw_tag.strip()
        reason = locale_tag_error(tag)
        if reason is not None:
            logger.warning("%s", ErrorTemplate.locale_tag_malformed(tag, reason))
            continue
        tags.append(tag)

    if not tags:
        logger.warning("%s", ErrorTemplate.locale_override_empty(override or ""))
        return None
    return tags


def resolve_locales(
    override: str | None,
    agent_locales: Sequence[LocaleTag],
) -> LocaleChain:
    """Build the locale chain from an override and the agent's locales.

    A non-empty override replaces the agent list. A missing or empty
    override, or one whose tags are all malformed, falls back to the agent
    list. Malformed tags inside an otherwise usable override are dropped.

    Args:
        override: Comma-separated locale tags, "" or None
        agent_locales: Locales reported by the user agent, in priority order

    Returns:
        LocaleChain with every parent tag, no duplicates

    Example:
        >>> resolve_locales("de-CH,fr", ["en-US"])
        ('de-CH', 'de', 'fr')
        >>> resolve_locales(None, ["en-US", "en-GB"])
        ('en-US', 'en', 'en-GB')
    """
    base = _override_tags(override)
    if base is None:
        base = list(agent_locales)
    chain = expand_locales(base)
    logger.debug("Resolved locale chain %s (override=%r)", chain, override)
    return chain


@dataclass(frozen=True, slots=True)
class LocalePreferences:
    """Resolved locale preferences for one locale-change event.

    Attributes:
        override: Raw override value ("" for explicitly empty, None if absent)
        agent_locales: Locales reported by the agent
        chain: Resolved fallback chain
    """

    override: str | None
    agent_locales: tuple[LocaleTag, ...]
    chain: LocaleChain

    @classmethod
    def resolve(
        cls,
        override: str | None = None,
        agent_locales: Sequence[LocaleTag] | None = None,
    ) -> LocalePreferences:
        """Resolve preferences; agent locales default to the environment."""
        agents = tuple(agent_locales) if agent_locales is not None else get_agent_locales()
        return cls(override, agents, resolve_locales(override, agents))

    @classmethod
    def from_url(
        cls,
        url: str,
        agent_locales: Sequence[LocaleTag] | None = None,
    ) -> LocalePreferences:
        """Resolve preferences from the `language` key of a URL fragment."""
        return cls.resolve(read_language_parameter(url), agent_locales)

    @classmethod
    def from_environment(cls, override: str | None = None) -> LocalePreferences:
        """Resolve preferences against the process locale environment."""
        return cls.resolve(override, get_agent_locales())

    @property
    def primary(self) -> LocaleTag | None:
        """Most preferred locale, used for collation; None if the chain is empty."""
        return self.chain[0] if self.chain else None

    @property
    def has_override(self) -> bool:
        """True when a non-empty override was supplied."""
        return bool(self.override)
