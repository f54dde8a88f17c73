"""Split point listing backed by the metadata table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.types import PREV_ROW_COLUMN
from .extent import decode_metadata_row
from .scanner import scan_table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..core.types import Row
    from .metadata_table import MetadataStore

logger = logging.getLogger(__name__)


def sample_splits(splits: Sequence[Row], max_splits: int) -> list[Row]:
    """Pick max_splits evenly spaced rows spanning the whole split set.

    Returns all splits when there are no more than max_splits of them.
    """
    if max_splits <= 0 or len(splits) <= max_splits:
        return list(splits)
    step = len(splits) / (max_splits + 1)
    return [splits[int((i + 1) * step)] for i in range(max_splits)]


class TableOperations:
    """Split listing for the tables of a metadata store.

    Args:
        store: Metadata store to read tablets from
        batch_size: Scan batch size used when reading the metadata table
    """

    def __init__(self, store: MetadataStore, batch_size: int = 1000):
        self._store = store
        self.batch_size = batch_size

    def get_splits(self, table_name: str, max_splits: int = 0) -> list[Row]:
        """Return the split rows of a table in ascending order.

        Args:
            table_name: Table to list
            max_splits: Cap on the number of rows returned, 0 for no cap

        Raises:
            TableNotFoundError: If the table does not exist
        """
        table_id = self._store.table_id(table_name)
        splits: list[Row] = []
        with scan_table(self._store, table_id, self.batch_size) as scanner:
            for key, _value in scanner:
                if not PREV_ROW_COLUMN.has_columns(key):
                    continue
                owner, end_row = decode_metadata_row(key.row)
                if owner == table_id and end_row is not None:
                    splits.append(end_row)
        logger.debug(f"Table {table_name} has {len(splits)} splits")
        return sample_splits(splits, max_splits)
