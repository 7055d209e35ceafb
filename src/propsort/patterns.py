from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class NamingPatterns:
    """Name tables that hint at a value's shape when its syntax does not."""

    function: re.Pattern[str]
    object: re.Pattern[str]

    def looks_like_function(self, name: str | None) -> bool:
        return bool(name) and self.function.search(name) is not None

    def looks_like_object(self, name: str | None) -> bool:
        return bool(name) and self.object.search(name) is not None


FUNCTION_NAME_PATTERN = re.compile(
    r"Handler$|Callback$|^on[A-Z]|^handle[A-Z]|^toggle[A-Z]"
)
OBJECT_NAME_PATTERN = re.compile(r"Config$|Options$|Props$|Style$|Data$|^obj|^data")

DEFAULT_PATTERNS = NamingPatterns(
    function=FUNCTION_NAME_PATTERN,
    object=OBJECT_NAME_PATTERN,
)
