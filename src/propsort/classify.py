from __future__ import annotations

from propsort.extract import safe_text
from propsort.model import (
    Attribute,
    AttributeValue,
    Category,
    Classification,
    ExpressionShape,
    OrderOptions,
    TextFn,
    ValueKind,
)
from propsort.patterns import DEFAULT_PATTERNS, NamingPatterns


def _unknown(reason: str) -> Classification:
    return Classification(category=Category.UNKNOWN, reason=reason)


def is_function_shaped(
    value: AttributeValue, patterns: NamingPatterns = DEFAULT_PATTERNS
) -> bool:
    if value.shape is ExpressionShape.FUNCTION:
        return True
    return value.shape is ExpressionShape.IDENTIFIER and patterns.looks_like_function(
        value.identifier
    )


def is_object_shaped(
    value: AttributeValue, patterns: NamingPatterns = DEFAULT_PATTERNS
) -> bool:
    if value.shape is ExpressionShape.OBJECT:
        return True
    return value.shape is ExpressionShape.IDENTIFIER and patterns.looks_like_object(
        value.identifier
    )


def is_literal_value(value: AttributeValue) -> bool:
    if value.kind is ValueKind.LITERAL:
        return True
    return value.kind is ValueKind.CONTAINER and value.shape is ExpressionShape.LITERAL


def _classify_multiline(
    name: str, value: AttributeValue, patterns: NamingPatterns
) -> Category:
    if value.kind is ValueKind.CONTAINER:
        if is_function_shaped(value, patterns):
            return Category.MULTILINE_FUNCTION
        if is_object_shaped(value, patterns):
            return Category.MULTILINE_OBJECT
    if patterns.looks_like_function(name):
        return Category.MULTILINE_FUNCTION
    return Category.MULTILINE_OBJECT


def _classify_single_line(
    name: str, value: AttributeValue, patterns: NamingPatterns
) -> Category:
    if is_literal_value(value):
        return Category.STRING
    if value.kind is ValueKind.CONTAINER:
        if is_function_shaped(value, patterns):
            return Category.FUNCTION
        if patterns.looks_like_function(name):
            return Category.FUNCTION
        # Object-looking names stay variables; checked after the function names.
        if patterns.looks_like_object(name):
            return Category.VARIABLE
    return Category.VARIABLE


def classify(
    attribute: Attribute,
    options: OrderOptions,
    text: TextFn,
    *,
    patterns: NamingPatterns = DEFAULT_PATTERNS,
) -> Classification:
    """Assign ``attribute`` to one of the ordered categories.

    Multiline status is decided before any single-line category; naming
    patterns only break ties the syntactic shape leaves open. Anything that
    cannot be decided safely comes back as ``Category.UNKNOWN`` with a reason.
    """
    if attribute.is_spread:
        return _unknown("spread attributes are not classified")
    name = attribute.name
    if not name:
        return _unknown("attribute has no name")
    if options.is_reserved(name):
        return Classification(category=Category.RESERVED)
    value = attribute.value
    if value is None:
        return Classification(category=Category.SHORTHAND)
    value_text = safe_text(text, value)
    if value_text is None:
        return _unknown(f"source text unavailable for value of {name!r}")
    if "\n" in value_text:
        return Classification(category=_classify_multiline(name, value, patterns))
    return Classification(category=_classify_single_line(name, value, patterns))
