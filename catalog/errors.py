"""
Exceptions raised while loading catalog datasets.

A query for a year or week with no chart data is not an error; it returns an
empty mapping.
"""


class CatalogError(Exception):
    """Base class for dataset loading failures."""


class FetchError(CatalogError):
    """The resource could not be read (missing file, network or HTTP error)."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not fetch {source}: {reason}")


class ParseError(CatalogError, ValueError):
    """The resource was read but its content is malformed."""
