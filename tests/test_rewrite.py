from __future__ import annotations

from collections import Counter
from dataclasses import replace

import pytest

from propsort.model import NoChange, OrderOptions, Replacement, Unsafe
from propsort.rewrite import (
    REPORT_MESSAGE,
    UNAVAILABLE_PLACEHOLDER,
    build_fix,
    is_permutation,
)

from tests.jsx_helpers import expr, literal, load_element, shorthand, spread


def _fix(props, options: OrderOptions | None = None, **kwargs):
    element, source = load_element("Button", props, **kwargs)
    return build_fix(element, options=options or OrderOptions(), text=source.text)


def test_fewer_than_two_attributes_is_no_change() -> None:
    assert _fix([]) == NoChange()
    assert _fix([literal("zzz", "1")]) == NoChange()
    assert _fix([spread("rest")]) == NoChange()


def test_sorted_attributes_are_no_change() -> None:
    assert _fix([shorthand("a"), literal("b", "1"), expr("onTap", "tap")]) == NoChange()


def test_replacement_puts_each_attribute_on_its_own_line() -> None:
    outcome = _fix([literal("b", "1"), shorthand("a")])
    assert outcome == Replacement(text='<Button\n  a\n  b="1" />', message=REPORT_MESSAGE)


def test_replacement_keeps_open_tag_terminator_and_base_indent() -> None:
    outcome = _fix(
        [expr("onTap", "tap"), literal("b", "1")],
        self_closing=False,
        indent="    ",
        prefix="const view = (\n",
    )
    assert isinstance(outcome, Replacement)
    assert outcome.text == '<Button\n      b="1"\n      onTap={tap}>'


def test_spread_markers_stay_between_their_groups() -> None:
    outcome = _fix(
        [shorthand("c"), spread("rest"), literal("b", "1"), shorthand("a"), spread("more"), shorthand("z")]
    )
    assert isinstance(outcome, Replacement)
    assert outcome.text == (
        '<Button\n  c\n  {...rest}\n  a\n  b="1"\n  {...more}\n  z />'
    )


def test_attributes_are_never_moved_across_a_spread() -> None:
    assert _fix([literal("zz", "1"), spread("rest"), shorthand("a")]) == NoChange()


def test_multiline_values_are_copied_verbatim() -> None:
    handler = "() => {\n  save();\n}"
    outcome = _fix([expr("onSave", handler, "ArrowFunctionExpression"), shorthand("a")])
    assert isinstance(outcome, Replacement)
    assert outcome.text == "<Button\n  a\n  onSave={" + handler + "} />"


def test_rewrite_is_idempotent() -> None:
    props = [expr("onTap", "tap"), literal("b", "1"), shorthand("a"), literal("key", "k")]
    outcome = _fix(props)
    assert isinstance(outcome, Replacement)
    reordered = [props[3], props[2], props[1], props[0]]
    element, source = load_element("Button", reordered, separator="\n  ")
    assert source.content.rstrip("\n") == outcome.text
    assert build_fix(element, options=OrderOptions(), text=source.text) == NoChange()


def test_replacement_contains_every_attribute_exactly_once() -> None:
    props = [
        expr("onTap", "tap"),
        spread("rest"),
        literal("title", "t"),
        literal("title", "t"),
        shorthand("hidden"),
        expr("style", "{\na: 1,\n}", "ObjectExpression"),
    ]
    element, source = load_element("Button", props)
    outcome = build_fix(element, options=OrderOptions(), text=source.text)
    assert isinstance(outcome, Replacement)
    body = outcome.text.split("\n  ")[1:]
    body[-1] = body[-1].removesuffix(" />")
    assert sorted(body) == sorted(source.text(attr) for attr in element.attributes)


def test_dropping_sorter_is_reported_unsafe() -> None:
    element, source = load_element("Button", [literal("b", "1"), shorthand("a"), shorthand("c")])

    def lossy_sorter(members, **_kwargs):
        return list(reversed(members))[:-1]

    outcome = build_fix(element, options=OrderOptions(), text=source.text, sorter=lossy_sorter)
    assert isinstance(outcome, Unsafe)
    assert "needs manual reorder" in outcome.message


def test_cloning_sorter_is_reported_unsafe() -> None:
    element, source = load_element("Button", [literal("b", "1"), shorthand("a")])

    def cloning_sorter(members, **_kwargs):
        return [replace(member) for member in members]

    outcome = build_fix(element, options=OrderOptions(), text=source.text, sorter=cloning_sorter)
    assert isinstance(outcome, Unsafe)


def test_is_permutation_uses_identity() -> None:
    element, _ = load_element("Button", [shorthand("a"), shorthand("a")])
    first, second = element.attributes
    assert is_permutation([second, first], [first, second])
    assert not is_permutation([first, first], [first, second])
    assert not is_permutation([first], [first, second])
    assert not is_permutation([replace(first), second], [first, second])


def test_unreadable_attribute_gets_placeholder() -> None:
    element, source = load_element("Button", [literal("b", "1"), shorthand("a")])
    unreadable = element.attributes[0]

    def text(node) -> str:
        if node is unreadable:
            raise OSError("buffer closed")
        return source.text(node)

    outcome = build_fix(element, options=OrderOptions(), text=text)
    assert isinstance(outcome, Replacement)
    assert outcome.placeholders == 1
    assert outcome.text == f"<Button\n  a\n  {UNAVAILABLE_PLACEHOLDER} />"


def test_unreadable_tag_name_is_unsafe() -> None:
    element, source = load_element("Button", [literal("b", "1"), shorthand("a")])

    def text(node) -> str:
        if node is element.tag:
            raise OSError("buffer closed")
        return source.text(node)

    assert isinstance(build_fix(element, options=OrderOptions(), text=text), Unsafe)


def test_explicit_attribute_list_overrides_element_attributes() -> None:
    element, source = load_element("Button", [literal("b", "1"), shorthand("a")])
    only_one = element.attributes[:1]
    assert build_fix(element, only_one, options=OrderOptions(), text=source.text) == NoChange()


def _hand_built(source: str, tag: str, attributes: list[tuple[str, str, str | None]], **extra):
    """Opening element over ``source`` with spans located by substring search."""
    from propsort.ingest import SourceText, ingest_opening_element

    tag_start = source.index(tag)
    nodes = []
    for attr_text, name, value_text in attributes:
        start = source.index(attr_text)
        value = None
        if value_text is not None:
            value_start = source.index(value_text, start)
            value = {"type": "Literal", "range": [value_start, value_start + len(value_text)]}
        nodes.append(
            {
                "type": "JSXAttribute",
                "range": [start, start + len(attr_text)],
                "name": {"type": "JSXIdentifier", "name": name},
                "value": value,
            }
        )
    node = {
        "type": "JSXOpeningElement",
        "range": [0, len(source)],
        "name": {"type": "JSXIdentifier", "name": tag, "range": [tag_start, tag_start + len(tag)]},
        "attributes": nodes,
        "selfClosing": source.endswith("/>"),
        **extra,
    }
    text = SourceText(content=source)
    return ingest_opening_element(node, text), text


def test_type_arguments_make_the_fix_unsafe() -> None:
    source = '<List<Item> b="1" a />'
    element, text = _hand_built(
        source,
        "List",
        [('b="1"', "b", '"1"'), ("a", "a", None)],
        typeArguments={"type": "TSTypeParameterInstantiation", "range": [5, 11]},
    )
    outcome = build_fix(element, options=OrderOptions(), text=text.text)
    assert isinstance(outcome, Unsafe)
    assert "<Item>" in outcome.message


def test_comment_between_attributes_makes_the_fix_unsafe() -> None:
    source = '<List b="1" /* keep me */ a />'
    element, text = _hand_built(source, "List", [('b="1"', "b", '"1"'), ("a", "a", None)])
    outcome = build_fix(element, options=OrderOptions(), text=text.text)
    assert isinstance(outcome, Unsafe)
    assert "keep me" in outcome.message


def test_whitespace_between_attributes_is_not_stray_text() -> None:
    source = '<List\n    b="1"\n\t a\n/>'
    element, text = _hand_built(source, "List", [('b="1"', "b", '"1"'), ("a", "a", None)])
    outcome = build_fix(element, options=OrderOptions(), text=text.text)
    assert isinstance(outcome, Replacement)


@pytest.mark.parametrize(
    "source, attributes",
    [
        ('<List b="1" a />', [('b="1"', "b", '"1"'), ("a", "a", None)]),
        ('<List b="1" a>', [('b="1"', "b", '"1"'), ("a", "a", None)]),
        ('<List<T> b="1" a />', [('b="1"', "b", '"1"'), ("a", "a", None)]),
        ('<List b="1" {/* x */} a />', [('b="1"', "b", '"1"'), ("a", "a", None)]),
        ('<List zz="1" // note\n a />', [('zz="1"', "zz", '"1"'), ("a", "a", None)]),
    ],
)
def test_fix_keeps_every_character_of_the_opening_tag(source, attributes) -> None:
    element, text = _hand_built(source, "List", attributes)
    outcome = build_fix(element, options=OrderOptions(), text=text.text)
    if isinstance(outcome, Unsafe):
        return
    assert isinstance(outcome, Replacement)
    start, end = element.span
    rewritten = source[:start] + outcome.text + source[end:]
    assert Counter("".join(source.split())) == Counter("".join(rewritten.split()))
