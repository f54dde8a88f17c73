"""Unit tests for metadata row and value decoding."""

import pytest

from tablet_splits.components.extent import (
    decode_metadata_row,
    decode_prev_row,
    encode_metadata_row,
    encode_prev_row,
    extent_from_entry,
)
from tablet_splits.core.errors import MalformedMetadataError
from tablet_splits.core.types import PREV_ROW_COLUMN, MetadataKey, TabletExtent


def prev_row_key(row):
    return MetadataKey(row, PREV_ROW_COLUMN.family, PREV_ROW_COLUMN.qualifier)


def test_encode_metadata_row():
    """Test tablet rows carry the table id and end row."""
    assert encode_metadata_row("1", b"m") == b"1;m"
    assert encode_metadata_row("1", None) == b"1<"
    assert encode_metadata_row("2a", b"") == b"2a;"


def test_default_tablet_row_sorts_last():
    """Test the default tablet row sorts after every end row of the table."""
    rows = [encode_metadata_row("1", r) for r in [b"\xff\xff", b"zzz", b"a"]]
    assert max(rows + [encode_metadata_row("1", None)]) == b"1<"


def test_decode_metadata_row():
    """Test rows split into table id and end row."""
    assert decode_metadata_row(b"1;m") == ("1", b"m")
    assert decode_metadata_row(b"1<") == ("1", None)
    assert decode_metadata_row(b"3f;") == ("3f", b"")


def test_decode_metadata_row_end_row_with_markers():
    """Test end rows may contain separator bytes themselves."""
    assert decode_metadata_row(b"1;a;b<c") == ("1", b"a;b<c")


def test_decode_metadata_row_malformed():
    """Test rows without a marker are rejected."""
    with pytest.raises(MalformedMetadataError):
        decode_metadata_row(b"1")
    with pytest.raises(MalformedMetadataError):
        decode_metadata_row(b"1<junk")


def test_prev_row_value_encoding():
    """Test previous-row values with and without a lower bound."""
    assert encode_prev_row(None) == b"\x00"
    assert encode_prev_row(b"m") == b"\x01m"
    assert decode_prev_row(b"\x00") is None
    assert decode_prev_row(b"\x01m") == b"m"
    assert decode_prev_row(b"\x01") == b""


def test_prev_row_empty_value_is_unbounded():
    """Test an empty or absent value means no lower bound."""
    assert decode_prev_row(b"") is None
    assert decode_prev_row(None) is None


def test_extent_from_entry():
    """Test a previous-row entry decodes into a full extent."""
    assert extent_from_entry(prev_row_key(b"1;z"), b"\x01m") == TabletExtent("1", b"m", b"z")
    assert extent_from_entry(prev_row_key(b"1;m"), b"\x00") == TabletExtent("1", None, b"m")
    assert extent_from_entry(prev_row_key(b"1<"), b"\x01z") == TabletExtent("1", b"z", None)


def test_is_default_tablet():
    """Test only an absent end row marks the default tablet."""
    assert TabletExtent("1", b"z", None).is_default_tablet()
    assert TabletExtent("1", None, None).is_default_tablet()
    assert not TabletExtent("1", b"m", b"z").is_default_tablet()
    assert not TabletExtent("1", None, b"").is_default_tablet()
