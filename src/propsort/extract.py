from __future__ import annotations

from propsort.model import Spanned, TextFn


def safe_text(text: TextFn, node: Spanned | None) -> str | None:
    """Return the source text of ``node`` or ``None`` when it is unavailable.

    The host capability may fail in arbitrary ways; every failure is folded
    into ``None`` here so callers branch on a value instead of an exception.
    """
    if node is None:
        return None
    try:
        value = text(node)
    except Exception:
        return None
    if not isinstance(value, str):
        return None
    return value


def line_count(value_text: str) -> int:
    return len(value_text.split("\n"))
