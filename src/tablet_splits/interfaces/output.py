"""Protocol definition for output sinks."""

from __future__ import annotations
from typing import Protocol


class OutputSink(Protocol):
    """Protocol for line-oriented output destinations."""

    def print(self, line: str) -> None:
        """Emit one line."""
        ...

    def close(self) -> None:
        """Flush and release the destination; called exactly once."""
        ...
