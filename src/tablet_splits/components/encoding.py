"""Row rendering and digest-based tablet naming."""

from __future__ import annotations

import base64
import hashlib
from typing import TYPE_CHECKING

from ..core.errors import DigestUnavailableError

if TYPE_CHECKING:
    from ..core.types import Row, TabletExtent


def encode_row(row: Row | None, encode: bool) -> str | None:
    """Render row bytes for display.

    Args:
        row: Raw row bytes, or None for an absent boundary
        encode: Render as base64 text instead of the bytes themselves

    Returns:
        None if row is None, otherwise the rendered text
    """
    if row is None:
        return None
    if encode:
        return base64.b64encode(row).decode("ascii")
    return row.decode("utf-8", errors="replace")


def decode_row(text: str) -> Row:
    """Recover row bytes from their base64 rendering."""
    return base64.b64decode(text.encode("ascii"), validate=True)


def obscured_tablet_name(extent: TabletExtent, digest: str = "md5") -> str:
    """Return a short stable label for a tablet that hides its end row.

    The label is the base64 digest of the end row bytes; an absent or
    empty end row digests the empty input.
    """
    try:
        digester = hashlib.new(digest)
    except ValueError as e:
        raise DigestUnavailableError(f"Digest algorithm {digest!r} is not available") from e
    if digester.digest_size == 0:
        raise DigestUnavailableError(f"Digest algorithm {digest!r} has no fixed length")

    if extent.end_row:
        digester.update(extent.end_row)
    return base64.b64encode(digester.digest()).decode("ascii")
