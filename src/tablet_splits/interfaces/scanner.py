"""Protocol definition for metadata scanners."""

from __future__ import annotations
from typing import Protocol, Iterator
from ..core.types import Column, MetadataEntry, Row


class Scanner(Protocol):
    """Protocol for ordered scans over the metadata table."""

    def fetch_column(self, column: Column) -> None:
        """Restrict returned entries to the given column."""
        ...

    def set_range(self, start: Row, end: Row) -> None:
        """Limit the scan to rows between start and end, inclusive."""
        ...

    def __iter__(self) -> Iterator[MetadataEntry]:
        """Lazily yield entries in ascending key order."""
        ...

    def close(self) -> None:
        """Release the server-side scan session."""
        ...

    def __enter__(self) -> Scanner:
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...
