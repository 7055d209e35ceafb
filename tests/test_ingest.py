from __future__ import annotations

import json
from pathlib import Path

import pytest

from propsort.exceptions import ExtractionError, IngestError
from propsort.ingest import (
    SourceText,
    ingest_attribute,
    ingest_opening_element,
    iter_opening_elements,
    load_tree,
)
from propsort.model import ExpressionShape, SourceNode, ValueKind

from tests.jsx_helpers import build_jsx, expr, literal, shorthand, spread


@pytest.mark.parametrize("babel", [False, True])
def test_ingest_opening_element_shapes(babel: bool) -> None:
    source, tree = build_jsx(
        "Card",
        [
            shorthand("open"),
            literal("title", "Hi"),
            expr("onClose", "close"),
            expr("style", "{ a: 1 }", "ObjectExpression"),
            spread("rest"),
        ],
        indent="  ",
        babel=babel,
    )
    text = SourceText(content=source)
    (node,) = list(iter_opening_elements(tree))
    element = ingest_opening_element(node, text)
    assert text.text(element.tag) == "Card"
    assert element.self_closing is True
    assert element.base_indent == "  "
    open_attr, title, on_close, style, rest = element.attributes
    assert open_attr.name == "open" and open_attr.value is None
    assert title.value is not None and title.value.kind is ValueKind.LITERAL
    assert text.text(title) == 'title="Hi"'
    assert on_close.value is not None
    assert on_close.value.shape is ExpressionShape.IDENTIFIER
    assert on_close.value.identifier == "close"
    assert style.value is not None and style.value.shape is ExpressionShape.OBJECT
    assert rest.is_spread and rest.name is None
    assert text.text(rest) == "{...rest}"


def test_iter_opening_elements_in_document_order() -> None:
    tree = {
        "type": "Program",
        "body": [
            {"type": "JSXOpeningElement", "name": {"type": "JSXIdentifier", "name": "A"}},
            {
                "type": "JSXElement",
                "openingElement": {"type": "JSXOpeningElement", "name": {"type": "JSXIdentifier", "name": "B"}},
                "children": [
                    {"type": "JSXOpeningElement", "name": {"type": "JSXIdentifier", "name": "C"}},
                ],
                "parent": {"type": "JSXOpeningElement", "name": {"type": "JSXIdentifier", "name": "X"}},
            },
        ],
    }
    names = [node["name"]["name"] for node in iter_opening_elements(tree)]
    assert names == ["A", "B", "C"]


def test_namespaced_and_unknown_attribute_nodes() -> None:
    namespaced = ingest_attribute(
        {
            "type": "JSXAttribute",
            "range": [0, 11],
            "name": {
                "type": "JSXNamespacedName",
                "namespace": {"type": "JSXIdentifier", "name": "xlink"},
                "name": {"type": "JSXIdentifier", "name": "href"},
            },
            "value": None,
        }
    )
    assert namespaced.name == "xlink:href"
    odd = ingest_attribute({"type": "Comment", "range": [1, 2]})
    assert odd.name is None and not odd.is_spread


def test_element_valued_attribute() -> None:
    attribute = ingest_attribute(
        {
            "type": "JSXAttribute",
            "range": [0, 14],
            "name": {"type": "JSXIdentifier", "name": "icon"},
            "value": {"type": "JSXElement", "range": [5, 14]},
        }
    )
    assert attribute.value is not None
    assert attribute.value.kind is ValueKind.ELEMENT


def test_missing_offsets_raise_ingest_error() -> None:
    with pytest.raises(IngestError):
        ingest_attribute({"type": "JSXAttribute", "name": {"type": "JSXIdentifier", "name": "a"}})
    with pytest.raises(IngestError):
        ingest_opening_element({"type": "JSXElement"}, SourceText(content=""))


def test_source_text_positions_and_errors() -> None:
    text = SourceText(content="ab\n  <A />\n")
    assert text.position(0) == (1, 1)
    assert text.position(5) == (2, 3)
    assert text.line_indent(5) == "  "
    assert text.slice((5, 10)) == "<A />"
    with pytest.raises(ExtractionError):
        text.text(SourceNode(span=(5, 99)))
    with pytest.raises(ExtractionError):
        text.text(object())


def test_load_tree_errors(tmp_path: Path) -> None:
    good = tmp_path / "tree.json"
    good.write_text(json.dumps({"type": "Program", "body": []}))
    assert load_tree(good)["type"] == "Program"
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(IngestError):
        load_tree(bad)
    listing = tmp_path / "list.json"
    listing.write_text("[]")
    with pytest.raises(IngestError):
        load_tree(listing)
    with pytest.raises(IngestError):
        load_tree(tmp_path / "missing.json")
