"""ESTree / Babel JSON adapter.

Turns ``JSXOpeningElement`` nodes of a JSON syntax tree into ``Element``
values. Expression shapes are decided here, once, so the ordering core never
inspects node type strings.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterator, Mapping

from propsort.exceptions import IngestError
from propsort.ingest.source_text import SourceText
from propsort.model import (
    Attribute,
    AttributeValue,
    Element,
    ExpressionShape,
    SourceNode,
    Span,
    ValueKind,
)

JSONNode = Mapping[str, object]

OPENING_ELEMENT = "JSXOpeningElement"

_LITERAL_TYPES = frozenset(
    {
        "Literal",
        "StringLiteral",
        "NumericLiteral",
        "BooleanLiteral",
        "NullLiteral",
        "RegExpLiteral",
        "BigIntLiteral",
        "DecimalLiteral",
    }
)
_FUNCTION_TYPES = frozenset({"ArrowFunctionExpression", "FunctionExpression"})
_ELEMENT_VALUE_TYPES = frozenset({"JSXElement", "JSXFragment"})
# Keys that point back up the tree or only carry positions.
_SKIP_KEYS = frozenset({"parent", "loc", "range", "start", "end", "comments", "tokens"})


def load_tree(path: Path) -> JSONNode:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise IngestError(f"Failed to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise IngestError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise IngestError(f"{path} does not contain a syntax tree object")
    return payload


def node_span(node: JSONNode) -> Span:
    raw_range = node.get("range")
    if isinstance(raw_range, (list, tuple)) and len(raw_range) == 2:
        start, end = raw_range
    else:
        start, end = node.get("start"), node.get("end")
    if type(start) is not int or type(end) is not int:
        raise IngestError(f"{node.get('type', '<node>')} carries no source offsets")
    return start, end


def node_type(node: object) -> str:
    if isinstance(node, Mapping):
        return str(node.get("type", ""))
    return ""


def iter_opening_elements(tree: object) -> Iterator[JSONNode]:
    """Yield every ``JSXOpeningElement`` in document order."""
    stack: list[object] = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, Mapping):
            if current.get("type") == OPENING_ELEMENT:
                yield current
            children = [
                value for key, value in current.items() if key not in _SKIP_KEYS
            ]
            stack.extend(reversed(children))
        elif isinstance(current, list):
            stack.extend(reversed(current))


def attribute_name(name_node: object) -> str | None:
    kind = node_type(name_node)
    if kind == "JSXIdentifier" and isinstance(name_node, Mapping):
        name = name_node.get("name")
        return name if isinstance(name, str) else None
    if kind == "JSXNamespacedName" and isinstance(name_node, Mapping):
        namespace = attribute_name(name_node.get("namespace"))
        local = attribute_name(name_node.get("name"))
        if namespace and local:
            return f"{namespace}:{local}"
    return None


def expression_shape(expression: object) -> tuple[ExpressionShape, str | None]:
    kind = node_type(expression)
    if kind in _LITERAL_TYPES:
        return ExpressionShape.LITERAL, None
    if kind in _FUNCTION_TYPES:
        return ExpressionShape.FUNCTION, None
    if kind == "ObjectExpression":
        return ExpressionShape.OBJECT, None
    if kind == "Identifier" and isinstance(expression, Mapping):
        name = expression.get("name")
        return ExpressionShape.IDENTIFIER, name if isinstance(name, str) else None
    if kind == "JSXEmptyExpression":
        return ExpressionShape.EMPTY, None
    return ExpressionShape.OTHER, None


def attribute_value(value_node: object) -> AttributeValue | None:
    if value_node is None:
        return None
    if not isinstance(value_node, Mapping):
        raise IngestError("attribute value is not a node")
    kind = node_type(value_node)
    span = node_span(value_node)
    if kind in _LITERAL_TYPES:
        return AttributeValue(kind=ValueKind.LITERAL, span=span, shape=ExpressionShape.LITERAL)
    if kind == "JSXExpressionContainer":
        shape, identifier = expression_shape(value_node.get("expression"))
        return AttributeValue(
            kind=ValueKind.CONTAINER, span=span, shape=shape, identifier=identifier
        )
    if kind in _ELEMENT_VALUE_TYPES:
        return AttributeValue(kind=ValueKind.ELEMENT, span=span)
    return AttributeValue(kind=ValueKind.CONTAINER, span=span)


def ingest_attribute(node: object) -> Attribute:
    if not isinstance(node, Mapping):
        raise IngestError("attribute entry is not a node")
    span = node_span(node)
    kind = node_type(node)
    if kind == "JSXSpreadAttribute":
        return Attribute(span=span, is_spread=True)
    if kind != "JSXAttribute":
        # Unrecognised entries stay in place as nameless attributes.
        return Attribute(span=span)
    return Attribute(
        span=span,
        name=attribute_name(node.get("name")),
        value=attribute_value(node.get("value")),
    )


def ingest_opening_element(node: JSONNode, source: SourceText) -> Element:
    if node.get("type") != OPENING_ELEMENT:
        raise IngestError(f"expected {OPENING_ELEMENT}, got {node_type(node) or '<none>'}")
    name_node = node.get("name")
    if not isinstance(name_node, Mapping):
        raise IngestError(f"{OPENING_ELEMENT} has no name node")
    raw_attributes = node.get("attributes") or []
    if not isinstance(raw_attributes, list):
        raise IngestError(f"{OPENING_ELEMENT} attributes must be a list")
    span = node_span(node)
    return Element(
        tag=SourceNode(span=node_span(name_node)),
        attributes=tuple(ingest_attribute(item) for item in raw_attributes),
        span=span,
        self_closing=bool(node.get("selfClosing", False)),
        base_indent=source.line_indent(span[0]),
    )
