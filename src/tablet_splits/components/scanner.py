"""Batched, ordered scanner over the metadata table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.errors import ScanError
from ..core.types import PREV_ROW_COLUMN

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..core.types import Column, MetadataEntry, Row, TableId
    from ..interfaces import Scanner
    from .metadata_table import MetadataStore

logger = logging.getLogger(__name__)


class MetadataScanner:
    """Lazy scanner fetching metadata entries from a store in batches.

    Args:
        store: Metadata store serving the scan
        batch_size: Entries fetched per round trip

    Invariants:
        - Entries are yielded in ascending key order
        - A server-side session is held from the first fetch until close()
        - A scanner is iterated at most once
    """

    def __init__(self, store: MetadataStore, batch_size: int = 1000):
        self._store = store
        self.batch_size = batch_size
        self._columns: list[Column] = []
        self._range: tuple[Row, Row] | None = None
        self._session: int | None = None
        self._started = False
        self._closed = False

    def fetch_column(self, column: Column) -> None:
        """Restrict the scan to the given column (may be called repeatedly)."""
        self._columns.append(column)

    def set_range(self, start: Row, end: Row) -> None:
        """Scan rows from start to end, both inclusive."""
        self._range = (start, end)

    def __iter__(self) -> Iterator[MetadataEntry]:
        if self._closed:
            raise ScanError("Scanner is closed")
        if self._started:
            raise ScanError("Scanner cannot be restarted")
        if self._range is None:
            raise ScanError("Scan range not set")
        self._started = True
        return self._scan(*self._range)

    def _scan(self, start: Row, end: Row) -> Iterator[MetadataEntry]:
        self._session = self._store.open_session(start, end)
        logger.info(f"Scanning metadata rows {start!r} to {end!r}")
        after = None
        while True:
            if self._closed:
                return
            batch = self._store.fetch_batch(self._session, start, end, self._columns, after, self.batch_size)
            logger.debug(f"Fetched batch of {len(batch)} entries")
            yield from batch
            if len(batch) < self.batch_size:
                return
            after = batch[-1][0]

    def close(self) -> None:
        """Release the server-side session."""
        if self._closed:
            return
        self._closed = True
        if self._session is not None:
            self._store.close_session(self._session)
            self._session = None

    def __enter__(self) -> MetadataScanner:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def table_range(table_id: TableId, sentinel: bytes = b"<") -> tuple[Row, Row]:
    """Return the inclusive metadata row range holding a table's tablets."""
    start = table_id.encode("utf-8")
    return start, start + sentinel


def scan_table(
    store: MetadataStore,
    table_id: TableId,
    batch_size: int = 1000,
    sentinel: bytes = b"<",
) -> Scanner:
    """Create a scanner over one table's previous-row metadata entries."""
    scanner = store.create_scanner(batch_size)
    scanner.fetch_column(PREV_ROW_COLUMN)
    scanner.set_range(*table_range(table_id, sentinel))
    return scanner
