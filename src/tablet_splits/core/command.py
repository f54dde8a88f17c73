"""GetSplits command - lists the split points of a table.

Orchestrates table resolution, split listing or metadata scanning,
extent formatting, and output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ..components.encoding import encode_row
from ..components.extent import extent_from_entry
from ..components.formatter import format_extent
from ..components.output import open_sink
from ..components.scanner import scan_table
from ..components.splits import TableOperations
from .config import SplitsConfig
from .types import PREV_ROW_COLUMN

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..components.metadata_table import MetadataStore
    from ..interfaces import OutputSink, SplitsProvider
    from .types import TableId

logger = logging.getLogger(__name__)


class GetSplitsCommand:
    """Retrieve the current split points for the tablets of a table.

    Args:
        store: Metadata store of the instance to inspect
        config: Tool configuration (defaults used when omitted)
        splits_provider: Source of split rows for plain mode (metadata
            backed TableOperations when omitted)

    Modes:
        - plain: one line per split row, optionally capped to an evenly
          spaced subset
        - verbose: one line per tablet with its obscured name and extent,
          rebuilt from the metadata table
    """

    def __init__(
        self,
        store: MetadataStore,
        config: SplitsConfig | None = None,
        splits_provider: SplitsProvider | None = None,
    ):
        self.store = store
        self.config = config or SplitsConfig()
        self.splits_provider = splits_provider or TableOperations(store, batch_size=self.config.scan_batch_size)

    def execute(
        self,
        table_name: str,
        output_file: str | Path | None = None,
        max_splits: int = 0,
        encode: bool = False,
        verbose: bool = False,
        sink: OutputSink | None = None,
    ) -> int:
        """Write the splits of table_name to the sink and return 0.

        Raises:
            TableNotFoundError: If the table does not exist
            ScanError: If the metadata scan fails
            DigestUnavailableError: If the label digest is missing
        """
        table_id = self.store.table_id(table_name)

        if sink is None:
            sink = open_sink(output_file, page_size=self.config.page_size)

        if verbose:
            lines = self.extent_lines(table_id, encode)
        else:
            lines = self.split_lines(table_name, max_splits, encode)

        count = 0
        try:
            for line in lines:
                sink.print(line)
                count += 1
        finally:
            # Release the scan session before the sink
            lines.close()
            sink.close()

        logger.info(f"Listed {count} {'tablets' if verbose else 'splits'} of table {table_name}")
        return 0

    def split_lines(self, table_name: str, max_splits: int = 0, encode: bool = False) -> Iterator[str]:
        for row in self.splits_provider.get_splits(table_name, max_splits):
            yield encode_row(row, encode)

    def extent_lines(self, table_id: TableId, encode: bool = False) -> Iterator[str]:
        """Yield one formatted line per tablet of the table, in row order."""
        cfg = self.config
        with scan_table(self.store, table_id, cfg.scan_batch_size, cfg.range_sentinel) as scanner:
            for key, value in scanner:
                if not PREV_ROW_COLUMN.has_columns(key):
                    logger.debug(f"Skipping metadata cell {key}")
                    continue
                extent = extent_from_entry(key, value)
                if extent.table_id != table_id:
                    logger.debug(f"Skipping tablet of table {extent.table_id}")
                    continue
                yield format_extent(extent, encode, cfg.digest_algorithm, cfg.label_width)
