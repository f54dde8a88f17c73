"""Common type definitions for tablet split listing.

Defines the metadata key layout and the tablet extent view object.
"""

from __future__ import annotations

from dataclasses import dataclass

# Core primitive types
Row = bytes
TableId = str


@dataclass(frozen=True, order=True)
class MetadataKey:
    """Key of one metadata table cell, ordered by (row, family, qualifier)."""

    row: Row
    family: bytes = b""
    qualifier: bytes = b""


MetadataEntry = tuple[MetadataKey, bytes]


@dataclass(frozen=True)
class Column:
    """A column family/qualifier pair."""

    family: bytes
    qualifier: bytes

    def has_columns(self, key: MetadataKey) -> bool:
        """Return True if key carries exactly this column."""
        return key.family == self.family and key.qualifier == self.qualifier


@dataclass(frozen=True)
class TabletExtent:
    """Half-open row range (prev_end_row, end_row] owned by one tablet.

    Attributes:
        table_id: Identifier of the owning table
        prev_end_row: Lower boundary (exclusive), None if unbounded below
        end_row: Upper boundary (inclusive), None for the default tablet
    """

    table_id: TableId
    prev_end_row: Row | None = None
    end_row: Row | None = None

    def is_default_tablet(self) -> bool:
        return self.end_row is None


# Metadata table layout
PREV_ROW_COLUMN = Column(b"~tab", b"~pr")
DIRECTORY_COLUMN = Column(b"~tab", b"~dir")
END_ROW_SEPARATOR = b";"
DEFAULT_TABLET_MARKER = b"<"
