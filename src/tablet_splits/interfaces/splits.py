"""Protocol definition for split providers."""

from __future__ import annotations
from typing import Protocol
from ..core.types import Row


class SplitsProvider(Protocol):
    """Protocol for listing the split rows of a table."""

    def get_splits(self, table_name: str, max_splits: int = 0) -> list[Row]:
        """Return split rows in order; at most max_splits evenly spaced ones if max_splits > 0."""
        ...
