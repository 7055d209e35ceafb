from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Callable, Protocol, Tuple, TypeAlias

Span = Tuple[int, int]

DEFAULT_REACT_PROPS: tuple[str, ...] = (
    "key",
    "ref",
    "dangerouslySetInnerHTML",
    "children",
    "value",
    "defaultValue",
    "checked",
    "defaultChecked",
    "className",
    "style",
    "id",
    "name",
)

DEFAULT_INDENT_UNIT = "  "


class Spanned(Protocol):
    span: Span


TextFn: TypeAlias = Callable[[Spanned], str]


class Category(IntEnum):
    """Ordered attribute buckets; lower values sort first."""

    RESERVED = 1
    SHORTHAND = 2
    STRING = 3
    VARIABLE = 4
    FUNCTION = 5
    MULTILINE_OBJECT = 6
    MULTILINE_FUNCTION = 7
    UNKNOWN = 8

    @property
    def is_multiline(self) -> bool:
        return self in (Category.MULTILINE_OBJECT, Category.MULTILINE_FUNCTION)


class ValueKind(StrEnum):
    LITERAL = "literal"
    CONTAINER = "container"
    ELEMENT = "element"


class ExpressionShape(StrEnum):
    LITERAL = "literal"
    FUNCTION = "function"
    OBJECT = "object"
    IDENTIFIER = "identifier"
    EMPTY = "empty"
    OTHER = "other"


@dataclass(frozen=True)
class SourceNode:
    span: Span


@dataclass(frozen=True)
class AttributeValue:
    kind: ValueKind
    span: Span
    shape: ExpressionShape = ExpressionShape.OTHER
    identifier: str | None = None


@dataclass(frozen=True, eq=False)
class Attribute:
    """One entry of an opening tag's attribute list.

    Equality and hashing are by identity: two attributes with the same name and
    value text are still distinct entries of the list.
    """

    span: Span
    name: str | None = None
    value: AttributeValue | None = None
    is_spread: bool = False


@dataclass(frozen=True)
class Element:
    tag: SourceNode
    attributes: tuple[Attribute, ...]
    span: Span
    self_closing: bool = False
    base_indent: str = ""


@dataclass(frozen=True)
class OrderOptions:
    react_props_first: bool = True
    react_props_list: tuple[str, ...] = DEFAULT_REACT_PROPS
    indent_unit: str = DEFAULT_INDENT_UNIT

    def priority_index(self, name: str) -> int:
        try:
            return self.react_props_list.index(name)
        except ValueError:
            return len(self.react_props_list)

    def is_reserved(self, name: str) -> bool:
        return self.react_props_first and name in self.react_props_list


@dataclass(frozen=True)
class Classification:
    category: Category
    reason: str = ""

    @property
    def known(self) -> bool:
        return self.category is not Category.UNKNOWN


@dataclass(frozen=True)
class NoChange:
    pass


@dataclass(frozen=True)
class Replacement:
    text: str
    message: str
    placeholders: int = 0


@dataclass(frozen=True)
class Unsafe:
    message: str


FixOutcome: TypeAlias = NoChange | Replacement | Unsafe


@dataclass(frozen=True)
class TextEdit:
    span: Span
    replacement: str


@dataclass(frozen=True)
class Finding:
    message: str
    span: Span
    line: int
    column: int
    fix: TextEdit | None = None
    detail: str = ""


@dataclass
class CheckReport:
    findings: list[Finding] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
