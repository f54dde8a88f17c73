"""Rendering of tablet extents as display lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .encoding import encode_row, obscured_tablet_name

if TYPE_CHECKING:
    from ..core.types import TabletExtent

NEG_INF = "-inf"
POS_INF = "+inf"
DEFAULT_TABLET_SUFFIX = ") Default Tablet "


def format_extent(
    extent: TabletExtent,
    encode: bool = False,
    digest: str = "md5",
    label_width: int = 26,
) -> str:
    """Format one tablet as ``<label> (<prev>, <end>]``.

    The default tablet closes with ``) Default Tablet `` instead of ``]``.
    """
    label = obscured_tablet_name(extent, digest)
    pr = encode_row(extent.prev_end_row, encode)
    er = encode_row(extent.end_row, encode)
    closing = DEFAULT_TABLET_SUFFIX if extent.is_default_tablet() else "]"
    return "%-*s (%s, %s%s" % (
        label_width,
        label,
        NEG_INF if pr is None else pr,
        POS_INF if er is None else er,
        closing,
    )
