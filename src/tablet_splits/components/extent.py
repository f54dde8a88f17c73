"""Decoding of metadata rows and values into tablet extents.

Row layout:
    table_id ";" end_row    tablet with an end row
    table_id "<"            default (last) tablet of the table

Previous-row value layout:
    0x00                    no previous row
    0x01 prev_end_row       previous row bytes follow
"""

from __future__ import annotations

from ..core.errors import MalformedMetadataError
from ..core.types import (
    DEFAULT_TABLET_MARKER,
    END_ROW_SEPARATOR,
    MetadataKey,
    Row,
    TableId,
    TabletExtent,
)

_SEPARATOR = END_ROW_SEPARATOR[0]
_DEFAULT = DEFAULT_TABLET_MARKER[0]


def encode_metadata_row(table_id: TableId, end_row: Row | None) -> Row:
    """Build the metadata row that identifies a tablet by its end row."""
    prefix = table_id.encode("utf-8")
    if end_row is None:
        return prefix + DEFAULT_TABLET_MARKER
    return prefix + END_ROW_SEPARATOR + end_row


def decode_metadata_row(row: Row) -> tuple[TableId, Row | None]:
    """Split a metadata row into (table_id, end_row).

    Raises:
        MalformedMetadataError: If the row carries neither marker
    """
    for i, b in enumerate(row):
        if b == _SEPARATOR:
            return row[:i].decode("utf-8"), row[i + 1:]
        if b == _DEFAULT:
            if i != len(row) - 1:
                raise MalformedMetadataError(f"Default tablet row has trailing bytes: {row!r}")
            return row[:i].decode("utf-8"), None
    raise MalformedMetadataError(f"Not a tablet metadata row: {row!r}")


def encode_prev_row(prev_end_row: Row | None) -> bytes:
    if prev_end_row is None:
        return b"\x00"
    return b"\x01" + prev_end_row


def decode_prev_row(value: bytes | None) -> Row | None:
    """Decode a previous-row value; empty or absent means unbounded below."""
    if not value or value[0] == 0:
        return None
    return value[1:]


def extent_from_entry(key: MetadataKey, value: bytes | None) -> TabletExtent:
    """Build the extent described by one previous-row metadata entry."""
    table_id, end_row = decode_metadata_row(key.row)
    return TabletExtent(table_id, decode_prev_row(value), end_row)
