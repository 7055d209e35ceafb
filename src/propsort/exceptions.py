"""Exception types raised at the edges of propsort.

The ordering core itself reports failure as values; these exceptions belong to
the host-facing layers (ingestion, text extraction, configuration).
"""

from __future__ import annotations


class PropsortError(RuntimeError):
    """Base class for propsort errors."""


class ExtractionError(PropsortError):
    """Source text for a node could not be produced."""

    def __init__(self, message: str, *, span: tuple[int, int] | None = None):
        super().__init__(message)
        self.span = span


class IngestError(PropsortError):
    """The syntax tree handed to the adapter is not usable."""


class ConfigError(PropsortError):
    """Rule options failed validation."""
