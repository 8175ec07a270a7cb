# topmark:header:start
#
#   project      : ShapeGen
#   file         : strategies_shapegen.py
#   file_relpath : tests/strategies_shapegen.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating JSON documents.

Keys are drawn from a small vocabulary so that generated documents reuse
names and shapes often, which is where inference gets interesting (shared
shapes, name collisions, repeated aliases).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from hypothesis import strategies as st

KEYS: tuple[str, ...] = (
    "id",
    "name",
    "owner",
    "items",
    "tags",
    "user_id",
    "status",
    "meta",
)

BLACKLIST_CATEGORIES: tuple[str, ...] = ("Cs",)

scalars: st.SearchStrategy[Any] = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(10**6), max_value=10**6),
    st.floats(allow_nan=False, allow_infinity=False),
    st.text(
        alphabet=st.characters(blacklist_categories=BLACKLIST_CATEGORIES),  # type: ignore[arg-type]
        max_size=12,
    ),
)


def _containers(children: st.SearchStrategy[Any]) -> st.SearchStrategy[Any]:
    return st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.sampled_from(KEYS), children, max_size=4),
    )


json_values: st.SearchStrategy[Any] = st.recursive(scalars, _containers, max_leaves=25)
"""Arbitrary JSON values with a bounded number of leaves."""

json_objects: st.SearchStrategy[dict[str, Any]] = st.dictionaries(
    st.sampled_from(KEYS), json_values, max_size=5
)
"""Top-level JSON objects."""


def iter_objects(value: Any) -> Iterator[Mapping[str, Any]]:
    """Yield every object nested in ``value`` (``value`` included), depth first."""
    if isinstance(value, Mapping):
        yield value
        for child in value.values():
            yield from iter_objects(child)
    elif isinstance(value, list):
        for child in value:
            yield from iter_objects(child)
