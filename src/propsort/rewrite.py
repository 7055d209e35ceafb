from __future__ import annotations

from collections import Counter
from typing import Callable, Sequence

from propsort.compare import sort_group
from propsort.extract import safe_text
from propsort.grouping import Group, Segment, flatten, group_attributes
from propsort.model import (
    Attribute,
    Element,
    FixOutcome,
    NoChange,
    OrderOptions,
    Replacement,
    TextFn,
    Unsafe,
)

REPORT_MESSAGE = "JSX props should be sorted by type and length"
UNAVAILABLE_PLACEHOLDER = "/* attribute source unavailable */"

GroupSorter = Callable[..., list[Attribute]]


def is_permutation(candidate: Sequence[Attribute], original: Sequence[Attribute]) -> bool:
    """True when ``candidate`` holds exactly the entries of ``original``.

    Attributes hash by identity, so an equal-looking clone does not count.
    """
    if len(candidate) != len(original):
        return False
    return Counter(candidate) == Counter(original)


def _same_order(candidate: Sequence[Attribute], original: Sequence[Attribute]) -> bool:
    if len(candidate) != len(original):
        return False
    return all(left is right for left, right in zip(candidate, original))


def _sorted_segments(
    segments: Sequence[Segment],
    *,
    options: OrderOptions,
    text: TextFn,
    sorter: GroupSorter,
) -> list[Segment]:
    out: list[Segment] = []
    for segment in segments:
        if isinstance(segment, Group):
            members = sorter(segment.members, options=options, text=text)
            out.append(Group(members=tuple(members)))
        else:
            out.append(segment)
    return out


def render_opening_tag(
    element: Element,
    ordered: Sequence[Attribute],
    *,
    options: OrderOptions,
    text: TextFn,
) -> tuple[str, int] | None:
    """Render the opening tag with one attribute per line.

    Returns the text and the number of placeholders substituted for
    attributes whose source could not be read, or ``None`` when the tag name
    itself is unavailable.
    """
    tag_name = safe_text(text, element.tag)
    if tag_name is None:
        return None
    attr_indent = element.base_indent + options.indent_unit
    pieces: list[str] = []
    placeholders = 0
    for attribute in ordered:
        attribute_text = safe_text(text, attribute)
        if attribute_text is None:
            placeholders += 1
            attribute_text = UNAVAILABLE_PLACEHOLDER
        pieces.append(attribute_text)
    terminator = " />" if element.self_closing else ">"
    joined = ("\n" + attr_indent).join(pieces)
    return f"<{tag_name}\n{attr_indent}{joined}{terminator}", placeholders


def stray_text(element: Element, text: TextFn) -> str | None:
    """Non-whitespace text of the opening tag not owned by its tag name or attributes.

    Type arguments and comments between attributes land here; the rewrite
    would drop them. ``None`` means the tag region itself is unreadable.
    """
    region = safe_text(text, element)
    if region is None:
        return None
    base, end = element.span
    owned = sorted([element.tag.span, *(attribute.span for attribute in element.attributes)])
    pieces: list[str] = []
    cursor = base
    for start, stop in owned:
        start, stop = max(start, base), min(stop, end)
        if start > cursor:
            pieces.append(region[cursor - base : start - base])
        cursor = max(cursor, stop)
    pieces.append(region[cursor - base :])
    leftover = " ".join("".join(pieces).split())
    expected = "</>" if element.self_closing else "<>"
    return "" if leftover.replace(" ", "") == expected else leftover


def build_fix(
    element: Element,
    attributes: Sequence[Attribute] | None = None,
    *,
    options: OrderOptions,
    text: TextFn,
    sorter: GroupSorter = sort_group,
) -> FixOutcome:
    original = list(element.attributes if attributes is None else attributes)
    if len(original) < 2:
        return NoChange()
    grouped = group_attributes(original)
    candidate = flatten(
        _sorted_segments(grouped.segments, options=options, text=text, sorter=sorter)
    )
    if _same_order(candidate, original):
        return NoChange()
    if not is_permutation(candidate, original):
        return Unsafe(
            message=(
                f"{REPORT_MESSAGE} (needs manual reorder: sorted candidate has "
                f"{len(candidate)} attributes, expected the original {len(original)})"
            )
        )
    stray = stray_text(element, text)
    if stray is None:
        return Unsafe(message=f"{REPORT_MESSAGE} (needs manual reorder: opening tag text unavailable)")
    if stray:
        return Unsafe(
            message=(
                f"{REPORT_MESSAGE} (needs manual reorder: opening tag holds "
                f"{stray!r} outside its attributes)"
            )
        )
    rendered = render_opening_tag(element, candidate, options=options, text=text)
    if rendered is None:
        return Unsafe(message=f"{REPORT_MESSAGE} (needs manual reorder: tag name unavailable)")
    replacement_text, placeholders = rendered
    return Replacement(text=replacement_text, message=REPORT_MESSAGE, placeholders=placeholders)
