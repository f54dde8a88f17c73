"""Configuration for tablet split listing.

Defines the tunable parameters of the tool and loads them from TOML.
"""

from __future__ import annotations

import hashlib
import logging
import tomllib  # Python 3.11+
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)


def _require_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {type(value).__name__}")


@dataclass
class SplitsConfig:
    """Configuration parameters for split listing.

    Attributes:
        digest_algorithm: hashlib name of the digest behind obscured tablet names
        label_width: Width the obscured tablet name is padded to
        scan_batch_size: Number of metadata entries fetched per scan batch
        range_sentinel: Byte appended to the table id to close the scan range
        page_size: Lines per console page, None to disable paging
    """

    digest_algorithm: str = "md5"
    label_width: int = 26
    scan_batch_size: int = 1000
    range_sentinel: bytes = b"<"
    page_size: int | None = None

    def validate(self) -> None:
        """Raise ConfigError if any value has the wrong type or is out of range."""
        for name in ("label_width", "scan_batch_size"):
            _require_int(name, getattr(self, name))
        if self.page_size is not None:
            _require_int("page_size", self.page_size)
        if not isinstance(self.range_sentinel, bytes):
            raise ConfigError(f"range_sentinel must be bytes, got {type(self.range_sentinel).__name__}")
        if not isinstance(self.digest_algorithm, str):
            raise ConfigError(f"digest_algorithm must be a string, got {type(self.digest_algorithm).__name__}")

        if self.label_width < 0:
            raise ConfigError(f"label_width must be >= 0, got {self.label_width}")
        if self.scan_batch_size <= 0:
            raise ConfigError(f"scan_batch_size must be > 0, got {self.scan_batch_size}")
        if len(self.range_sentinel) != 1:
            raise ConfigError(f"range_sentinel must be a single byte, got {self.range_sentinel!r}")
        if self.page_size is not None and self.page_size <= 0:
            raise ConfigError(f"page_size must be > 0, got {self.page_size}")
        if self.digest_algorithm not in hashlib.algorithms_available:
            raise ConfigError(f"Unknown digest algorithm: {self.digest_algorithm}")
        try:
            digester = hashlib.new(self.digest_algorithm)
        except ValueError as e:
            raise ConfigError(f"Digest algorithm {self.digest_algorithm} is disabled: {e}") from e
        # Variable-length digests (shake_*) need an explicit output length
        if digester.digest_size == 0:
            raise ConfigError(f"Digest algorithm {self.digest_algorithm} has no fixed length")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SplitsConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        values = dict(data)
        if isinstance(values.get("range_sentinel"), str):
            values["range_sentinel"] = values["range_sentinel"].encode("utf-8")

        config = cls(**values)
        config.validate()
        return config


def load_config(path: Path) -> SplitsConfig:
    """Load a SplitsConfig from a TOML file.

    The file may hold the keys at top level or under a [splits] table.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    config = SplitsConfig.from_dict(data.get("splits", data))
    logger.info(f"Loaded config from {path}")
    return config
