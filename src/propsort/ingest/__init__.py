from propsort.ingest.estree import (
    ingest_attribute,
    ingest_opening_element,
    iter_opening_elements,
    load_tree,
)
from propsort.ingest.source_text import SourceText

__all__ = [
    "SourceText",
    "ingest_attribute",
    "ingest_opening_element",
    "iter_opening_elements",
    "load_tree",
]
