"""propsort package root."""

from propsort.model import (
    Category,
    Element,
    NoChange,
    OrderOptions,
    Replacement,
    Unsafe,
)
from propsort.rule import SortPropsRule

__all__ = [
    "__version__",
    "Category",
    "Element",
    "NoChange",
    "OrderOptions",
    "Replacement",
    "SortPropsRule",
    "Unsafe",
]

__version__ = "0.1.0"
