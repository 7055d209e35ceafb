from __future__ import annotations

from enum import IntEnum
from functools import cmp_to_key
from typing import Sequence

from propsort.classify import classify
from propsort.extract import line_count, safe_text
from propsort.model import Attribute, Category, OrderOptions, TextFn
from propsort.patterns import DEFAULT_PATTERNS, NamingPatterns


class Ordering(IntEnum):
    BEFORE = -1
    EQUAL = 0
    AFTER = 1


def _sign(delta: int) -> Ordering:
    if delta < 0:
        return Ordering.BEFORE
    if delta > 0:
        return Ordering.AFTER
    return Ordering.EQUAL


def _compare_names(name_a: str, name_b: str) -> Ordering:
    if len(name_a) != len(name_b):
        return _sign(len(name_a) - len(name_b))
    if name_a < name_b:
        return Ordering.BEFORE
    if name_a > name_b:
        return Ordering.AFTER
    return Ordering.EQUAL


def _compare_line_counts(a: Attribute, b: Attribute, text: TextFn) -> Ordering:
    text_a = safe_text(text, a.value)
    text_b = safe_text(text, b.value)
    if text_a is None or text_b is None:
        return Ordering.EQUAL
    return _sign(line_count(text_a) - line_count(text_b))


def compare(
    a: Attribute,
    b: Attribute,
    *,
    options: OrderOptions,
    text: TextFn,
    patterns: NamingPatterns = DEFAULT_PATTERNS,
) -> Ordering:
    """Order two attributes of the same group.

    ``EQUAL`` is returned whenever either side is unclassifiable, which keeps
    the pair in input order under a stable sort.
    """
    first = classify(a, options, text, patterns=patterns)
    second = classify(b, options, text, patterns=patterns)
    if not first.known or not second.known:
        return Ordering.EQUAL
    if first.category is not second.category:
        return _sign(first.category - second.category)
    # Both names are present once classification succeeded.
    name_a = a.name or ""
    name_b = b.name or ""
    if first.category is Category.RESERVED:
        return _sign(options.priority_index(name_a) - options.priority_index(name_b))
    by_name = _compare_names(name_a, name_b)
    if by_name is not Ordering.EQUAL:
        return by_name
    if first.category.is_multiline:
        return _compare_line_counts(a, b, text)
    return Ordering.EQUAL


def sort_group(
    attributes: Sequence[Attribute],
    *,
    options: OrderOptions,
    text: TextFn,
    patterns: NamingPatterns = DEFAULT_PATTERNS,
) -> list[Attribute]:
    """Return a new, stably sorted list; ``attributes`` is left untouched."""
    key = cmp_to_key(
        lambda a, b: int(compare(a, b, options=options, text=text, patterns=patterns))
    )
    return sorted(attributes, key=key)
