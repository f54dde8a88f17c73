"""Protocols for the collaborators of split listing."""

from .output import OutputSink
from .scanner import Scanner
from .splits import SplitsProvider

__all__ = ["OutputSink", "Scanner", "SplitsProvider"]
