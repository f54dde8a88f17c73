"""Exception hierarchy for tablet split listing.

Defines all custom exceptions used throughout the implementation.
"""

from __future__ import annotations


class SplitsError(Exception):
    """Base exception for all tablet split listing errors."""
    pass


class TableNotFoundError(SplitsError):
    """Raised when a table name cannot be resolved to a table id."""

    def __init__(self, table_name: str):
        super().__init__(f"Table {table_name!r} does not exist")
        self.table_name = table_name


class ScanError(SplitsError):
    """Raised when a metadata scan fails to fetch a batch."""
    pass


class DigestUnavailableError(SplitsError):
    """Raised when the digest used for tablet labels is missing from the runtime."""
    pass


class MalformedMetadataError(SplitsError):
    """Raised when a metadata row does not follow the tablet row layout."""
    pass


class OutputError(SplitsError):
    """Raised when an output sink is used after being closed."""
    pass


class ConfigError(SplitsError):
    """Raised when configuration values are invalid."""
    pass
