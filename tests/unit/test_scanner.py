"""Unit tests for the batched metadata scanner."""

import pytest

from tablet_splits.components.metadata_table import MetadataStore
from tablet_splits.components.scanner import scan_table, table_range
from tablet_splits.core.errors import ScanError
from tablet_splits.core.types import PREV_ROW_COLUMN, MetadataKey


@pytest.fixture
def store():
    """Create store with two tables, one split into ten tablets."""
    store = MetadataStore()
    store.create_table("T")
    store.add_splits("T", [f"row{i}".encode() for i in range(9)])
    store.create_table("U")
    store.add_splits("U", [b"u"])
    return store


def test_table_range():
    """Test the range spans the table id to the table id plus sentinel."""
    assert table_range("1") == (b"1", b"1<")
    assert table_range("2a", b"~") == (b"2a", b"2a~")


def test_scan_returns_prev_row_entries_in_order(store):
    """Test only previous-row cells of the table come back, sorted."""
    with scan_table(store, "1") as scanner:
        entries = list(scanner)

    keys = [key for key, _ in entries]
    assert len(entries) == 10
    assert keys == sorted(keys)
    assert all(PREV_ROW_COLUMN.has_columns(k) for k in keys)
    assert keys[-1].row == b"1<"


@pytest.mark.parametrize("batch_size", [1, 3, 10, 11, 1000])
def test_scan_batching_is_transparent(store, batch_size):
    """Test every batch size yields the same entries."""
    with scan_table(store, "1", batch_size=batch_size) as scanner:
        rows = [key.row for key, _ in scanner]

    assert rows == [f"1;row{i}".encode() for i in range(9)] + [b"1<"]


def test_scan_without_column_filter_returns_all_columns(store):
    """Test an unfiltered scan interleaves other columns."""
    scanner = store.create_scanner()
    scanner.set_range(b"2", b"2<")
    with scanner:
        families = {(k.family, k.qualifier) for k, _ in scanner}

    assert families == {(b"~tab", b"~pr"), (b"~tab", b"~dir")}


def test_scan_releases_session(store):
    """Test the session is released after a complete scan."""
    with scan_table(store, "1", batch_size=2) as scanner:
        list(scanner)
        assert store.open_sessions == 1
    assert store.open_sessions == 0


def test_scan_releases_session_on_early_exit(store):
    """Test the session is released when iteration stops early."""
    with scan_table(store, "1", batch_size=2) as scanner:
        for _ in scanner:
            break
    assert store.open_sessions == 0


def test_scan_releases_session_on_error(store):
    """Test the session is released when the consumer raises."""
    with pytest.raises(RuntimeError):
        with scan_table(store, "1") as scanner:
            for _ in scanner:
                raise RuntimeError("consumer failed")
    assert store.open_sessions == 0


def test_scanner_not_restartable(store):
    """Test a scanner cannot be iterated twice or after close."""
    scanner = scan_table(store, "1")
    list(scanner)
    with pytest.raises(ScanError):
        iter(scanner)
    scanner.close()
    with pytest.raises(ScanError):
        iter(scanner)


def test_scan_requires_range(store):
    """Test scanning without a range fails."""
    with pytest.raises(ScanError):
        iter(store.create_scanner())


def test_batch_fetch_on_closed_session_fails(store):
    """Test an expired session surfaces as a ScanError."""
    session = store.open_session()
    store.close_session(session)
    with pytest.raises(ScanError):
        store.fetch_batch(session, b"1", b"1<", [PREV_ROW_COLUMN], None, 10)


def test_batch_fetch_resumes_after_key(store):
    """Test batches resume strictly after the last key returned."""
    session = store.open_session()
    after = MetadataKey(b"1;row4", PREV_ROW_COLUMN.family, PREV_ROW_COLUMN.qualifier)
    batch = store.fetch_batch(session, b"1", b"1<", [PREV_ROW_COLUMN], after, 2)
    store.close_session(session)

    assert [k.row for k, _ in batch] == [b"1;row5", b"1;row6"]


def test_scan_fails_when_table_deleted(store):
    """Test deleting the scanned table surfaces on the next batch."""
    with scan_table(store, "1", batch_size=1) as scanner:
        entries = iter(scanner)
        first_key, _ = next(entries)
        store.delete_table("T")
        with pytest.raises(ScanError, match="deleted during the scan"):
            next(entries)

    assert first_key.row == b"1;row0"
    assert store.open_sessions == 0


def test_scan_survives_unrelated_table_delete(store):
    """Test deleting another table does not interrupt the scan."""
    with scan_table(store, "1", batch_size=1) as scanner:
        entries = iter(scanner)
        next(entries)
        store.delete_table("U")
        rest = list(entries)

    assert len(rest) == 9
    assert rest[-1][0].row == b"1<"
