"""Hypothesis strategies for find/replace and value list inputs.

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

# Small alphabets make needle collisions likely.
_HAYSTACK_ALPHABET = "ab;, é東"
_VALUE_ALPHABET = "abcxyz é東-"


def haystacks(max_size: int = 24) -> st.SearchStrategy[str]:
    """Generate short strings over a collision-prone alphabet."""
    return st.text(alphabet=_HAYSTACK_ALPHABET, max_size=max_size)


def needles() -> st.SearchStrategy[str]:
    """Generate non-empty needles over the haystack alphabet."""
    return st.text(alphabet=_HAYSTACK_ALPHABET, min_size=1, max_size=3)


@st.composite
def value_lists(draw: DrawFn, max_values: int = 6) -> tuple[list[str], str]:
    """Generate values and their ";"-delimited encoding.

    Values may contain literal semicolons, which the encoding escapes as
    ";;". A value never starts or ends with a semicolon, so the encoding is
    unambiguous.

    Events emitted:
    - value_list_size=N
    - value_list_escapes=yes|no
    """
    words = st.text(alphabet=_VALUE_ALPHABET, min_size=1, max_size=4)
    value = st.one_of(words, st.tuples(words, words).map(";".join))
    values = draw(st.lists(value, min_size=1, max_size=max_values))
    event(f"value_list_size={len(values)}")
    event(f"value_list_escapes={'yes' if any(';' in v for v in values) else 'no'}")
    return values, ";".join(v.replace(";", ";;") for v in values)
