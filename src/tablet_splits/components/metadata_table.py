"""In-memory sorted metadata table.

Uses sortedcontainers.SortedDict to keep metadata cells in key order, one
row per tablet, the way a tablet server hosts the metadata table.
"""

from __future__ import annotations

import base64
import itertools
import logging
import threading
import tomllib  # Python 3.11+
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sortedcontainers import SortedDict

from ..core.errors import ScanError, TableNotFoundError
from ..core.types import DIRECTORY_COLUMN, PREV_ROW_COLUMN, Column, MetadataKey
from .extent import decode_metadata_row, decode_prev_row, encode_metadata_row, encode_prev_row
from .scanner import MetadataScanner

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..core.types import MetadataEntry, Row, TableId

logger = logging.getLogger(__name__)

_ID_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    digits = []
    while True:
        n, r = divmod(n, 36)
        digits.append(_ID_DIGITS[r])
        if n == 0:
            return "".join(reversed(digits))


class MetadataStore:
    """Metadata table plus the table name to table id map.

    Invariants:
        - Every table has exactly one default tablet row (table_id + "<")
        - Previous-row pointers of a table's tablets chain in row order
        - Scan batches are only served to open sessions
        - Thread-safe via lock
    """

    def __init__(self):
        self._data: SortedDict = SortedDict()
        self._tables: dict[str, TableId] = {}
        self._lock = threading.Lock()
        self._next_table = 1
        self._session_ids = itertools.count(1)
        self._sessions: dict[int, tuple[Row, Row | None]] = {}
        self._expired: dict[int, str] = {}
        self._dir_ids = itertools.count(1)

    # Table operations

    def create_table(self, name: str) -> TableId:
        """Register a table with a single tablet covering all rows."""
        with self._lock:
            if name in self._tables:
                raise ValueError(f"Table {name!r} already exists")
            table_id = _base36(self._next_table)
            self._next_table += 1
            self._tables[name] = table_id

            row = encode_metadata_row(table_id, None)
            self._put_locked(MetadataKey(row, PREV_ROW_COLUMN.family, PREV_ROW_COLUMN.qualifier), encode_prev_row(None))
            self._put_locked(MetadataKey(row, DIRECTORY_COLUMN.family, DIRECTORY_COLUMN.qualifier), b"/default_tablet")

        logger.info(f"Created table {name} with id {table_id}")
        return table_id

    def add_splits(self, name: str, rows: Iterable[Row]) -> None:
        """Split the tablets of a table at each of the given rows."""
        table_id = self.table_id(name)
        with self._lock:
            for split in sorted(set(rows)):
                self._split_locked(table_id, split)
        logger.info(f"Added splits to table {name}")

    def delete_table(self, name: str) -> None:
        """Drop a table and expire the open scans covering its rows."""
        table_id = self.table_id(name)
        with self._lock:
            first_row = encode_metadata_row(table_id, b"")
            last_row = encode_metadata_row(table_id, None)
            doomed = []
            for key in self._data.irange(minimum=MetadataKey(first_row)):
                if key.row > last_row:
                    break
                doomed.append(key)
            for key in doomed:
                del self._data[key]
            del self._tables[name]

            # Scans reading the dropped rows can no longer complete
            for session, (start, end) in self._sessions.items():
                if start <= last_row and (end is None or end >= first_row):
                    self._expired[session] = f"Table {name} was deleted during the scan"
        logger.info(f"Deleted table {name} ({len(doomed)} metadata cells)")

    def table_id_map(self) -> dict[str, TableId]:
        with self._lock:
            return dict(self._tables)

    def table_exists(self, name: str) -> bool:
        with self._lock:
            return name in self._tables

    def table_id(self, name: str) -> TableId:
        """Resolve a table name to its id.

        Raises:
            TableNotFoundError: If no table has that name
        """
        with self._lock:
            try:
                return self._tables[name]
            except KeyError:
                raise TableNotFoundError(name) from None

    def put(self, key: MetadataKey, value: bytes) -> None:
        """Write a raw metadata cell."""
        with self._lock:
            self._put_locked(key, value)

    def _put_locked(self, key: MetadataKey, value: bytes) -> None:
        self._data[key] = value

    def _split_locked(self, table_id: TableId, split: Row) -> None:
        new_row = encode_metadata_row(table_id, split)
        # First tablet at or after the split row owns it
        owner = None
        for key in self._data.irange(minimum=MetadataKey(new_row)):
            if PREV_ROW_COLUMN.has_columns(key):
                owner = key
                break
        if owner is None or decode_metadata_row(owner.row)[0] != table_id:
            raise ValueError(f"No tablet of table {table_id} covers row {split!r}")
        if owner.row == new_row:
            logger.debug(f"Row {split!r} is already a split of table {table_id}")
            return

        prev = decode_prev_row(self._data[owner])
        self._put_locked(MetadataKey(new_row, PREV_ROW_COLUMN.family, PREV_ROW_COLUMN.qualifier), encode_prev_row(prev))
        self._put_locked(
            MetadataKey(new_row, DIRECTORY_COLUMN.family, DIRECTORY_COLUMN.qualifier),
            f"/t-{next(self._dir_ids):07d}".encode("ascii"),
        )
        self._data[owner] = encode_prev_row(split)

    # Scan sessions

    def create_scanner(self, batch_size: int = 1000) -> MetadataScanner:
        return MetadataScanner(self, batch_size=batch_size)

    def open_session(self, start: Row = b"", end: Row | None = None) -> int:
        """Open a scan session over rows start to end (None for unbounded)."""
        with self._lock:
            session = next(self._session_ids)
            self._sessions[session] = (start, end)
        logger.debug(f"Opened scan session {session}")
        return session

    def close_session(self, session: int) -> None:
        with self._lock:
            self._sessions.pop(session, None)
            self._expired.pop(session, None)
        logger.debug(f"Closed scan session {session}")

    @property
    def open_sessions(self) -> int:
        with self._lock:
            return len(self._sessions)

    def fetch_batch(
        self,
        session: int,
        start: Row,
        end: Row,
        columns: Sequence[Column],
        after: MetadataKey | None,
        limit: int,
    ) -> list[MetadataEntry]:
        """Return up to limit entries with start <= row <= end, in key order.

        Args:
            session: Open scan session id
            start: First row of the range (inclusive)
            end: Last row of the range (inclusive)
            columns: Columns to return, empty for all columns
            after: Resume strictly after this key, None to start at the range start
            limit: Maximum number of entries in the batch

        Raises:
            ScanError: If the session is not open or its table was deleted
        """
        with self._lock:
            if session not in self._sessions:
                raise ScanError(f"Scan session {session} is not open")
            if session in self._expired:
                raise ScanError(self._expired[session])

            if after is None:
                keys = self._data.irange(minimum=MetadataKey(start))
            else:
                keys = self._data.irange(minimum=after, inclusive=(False, True))

            batch: list[MetadataEntry] = []
            for key in keys:
                if key.row > end:
                    break
                if columns and not any(c.has_columns(key) for c in columns):
                    continue
                batch.append((key, self._data[key]))
                if len(batch) >= limit:
                    break
            return batch

    # Construction

    @classmethod
    def from_layout(cls, layout: dict[str, Any]) -> MetadataStore:
        """Build a store from a layout mapping.

        Layout shape::

            {"tables": {"T": {"splits": ["m", "z"], "base64": False}}}
        """
        store = cls()
        for name, table_layout in layout.get("tables", {}).items():
            table_layout = table_layout or {}
            store.create_table(name)
            encoded = table_layout.get("base64", False)
            splits = [base64.b64decode(s) if encoded else s.encode("utf-8") for s in table_layout.get("splits", [])]
            if splits:
                store.add_splits(name, splits)
        return store


def load_layout(path: Path) -> MetadataStore:
    """Load a store layout from a TOML file."""
    if not path.exists():
        raise FileNotFoundError(f"Layout file not found: {path}")
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        logger.error(f"Failed to parse layout {path}: {e}")
        raise
    store = MetadataStore.from_layout(data)
    logger.info(f"Loaded layout from {path}: {len(store.table_id_map())} tables")
    return store
