from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, TypeAlias

from propsort.model import Attribute


@dataclass(frozen=True)
class Group:
    """A maximal run of non-spread attributes; the unit that gets sorted."""

    members: tuple[Attribute, ...]


@dataclass(frozen=True)
class SpreadBoundary:
    marker: Attribute


Segment: TypeAlias = Group | SpreadBoundary


@dataclass(frozen=True)
class GroupedAttributes:
    segments: tuple[Segment, ...]

    @property
    def groups(self) -> tuple[Group, ...]:
        return tuple(item for item in self.segments if isinstance(item, Group))

    @property
    def boundaries(self) -> tuple[SpreadBoundary, ...]:
        return tuple(item for item in self.segments if isinstance(item, SpreadBoundary))


def group_attributes(attributes: Iterable[Attribute]) -> GroupedAttributes:
    """Split ``attributes`` at spread markers in one pass.

    Every marker closes the group before it, even an empty one, so the result
    always alternates ``Group, SpreadBoundary, Group, ...`` and ends with a
    group.
    """
    segments: list[Segment] = []
    current: list[Attribute] = []
    for attribute in attributes:
        if attribute.is_spread:
            segments.append(Group(members=tuple(current)))
            segments.append(SpreadBoundary(marker=attribute))
            current = []
            continue
        current.append(attribute)
    segments.append(Group(members=tuple(current)))
    return GroupedAttributes(segments=tuple(segments))


def flatten(segments: Iterable[Segment]) -> list[Attribute]:
    out: list[Attribute] = []
    for segment in segments:
        if isinstance(segment, SpreadBoundary):
            out.append(segment.marker)
        else:
            out.extend(segment.members)
    return out
