"""Tablet splits - list the split points and tablet extents of a table."""

from .components.metadata_table import MetadataStore, load_layout
from .components.splits import TableOperations
from .core.command import GetSplitsCommand
from .core.config import SplitsConfig, load_config
from .core.errors import (
    SplitsError,
    TableNotFoundError,
    ScanError,
    DigestUnavailableError,
    MalformedMetadataError,
    OutputError,
    ConfigError,
)
from .core.types import MetadataKey, Row, TableId, TabletExtent

__all__ = [
    "MetadataStore",
    "load_layout",
    "TableOperations",
    "GetSplitsCommand",
    "SplitsConfig",
    "load_config",
    "SplitsError",
    "TableNotFoundError",
    "ScanError",
    "DigestUnavailableError",
    "MalformedMetadataError",
    "OutputError",
    "ConfigError",
    "MetadataKey",
    "Row",
    "TableId",
    "TabletExtent",
]
