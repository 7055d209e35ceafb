from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import Path

from propsort.exceptions import ExtractionError, IngestError
from propsort.model import Span, Spanned


@dataclass(frozen=True)
class SourceText:
    """Source file contents plus the ``text(node)`` capability over offsets."""

    content: str
    path: Path | None = None
    _line_starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        starts = [0]
        for index, char in enumerate(self.content):
            if char == "\n":
                starts.append(index + 1)
        object.__setattr__(self, "_line_starts", tuple(starts))

    @classmethod
    def read(cls, path: Path) -> "SourceText":
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise IngestError(f"Failed to read {path}: {exc}") from exc
        return cls(content=content, path=path)

    def slice(self, span: Span) -> str:
        start, end = span
        if not (0 <= start <= end <= len(self.content)):
            raise ExtractionError(
                f"span {start}..{end} outside source of length {len(self.content)}",
                span=span,
            )
        return self.content[start:end]

    def text(self, node: Spanned) -> str:
        span = getattr(node, "span", None)
        if span is None:
            raise ExtractionError("node carries no source span")
        return self.slice(span)

    def position(self, offset: int) -> tuple[int, int]:
        """1-based (line, column) of ``offset``."""
        line_index = bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index] + 1

    def line_indent(self, offset: int) -> str:
        line_start = self._line_starts[bisect_right(self._line_starts, offset) - 1]
        prefix = self.content[line_start:offset]
        return prefix[: len(prefix) - len(prefix.lstrip(" \t"))]
