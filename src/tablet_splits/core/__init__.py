"""Tablet split listing core."""

from .command import GetSplitsCommand

__all__ = ["GetSplitsCommand"]
